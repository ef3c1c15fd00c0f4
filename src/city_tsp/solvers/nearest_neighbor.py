# solvers/nearest_neighbor.py
from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork
from city_tsp.solvers.common import degenerate_tour


class NearestNeighborSolver:
    """Greedy walk to the closest unvisited node; any dead end means no tour."""

    name = "nearest_neighbor"

    def __init__(self, *, root: int = 0, real_only: bool = False):
        self.root, self.real_only = root, real_only

    def solve(self, network: CityNetwork) -> Path:
        trivial = degenerate_tour(network, self.root)
        if trivial is not None:
            return trivial

        network.clear_visits()
        network.visit(self.root)
        path, curr = Path(), self.root
        for _ in range(network.node_count - 1):
            candidates = network.unvisited(network.neighbors(curr, real_only=self.real_only))
            if candidates.size == 0:
                return Path.invalid()
            dist = network.distances(curr)
            # strict <: the first minimum in id order wins ties
            nxt = int(candidates[dist[candidates].argmin()])
            path.add(network.get_edge(curr, nxt))
            network.visit(nxt)
            curr = nxt

        closing = network.get_edge(curr, self.root)
        if not closing.valid or (self.real_only and not closing.real):
            return Path.invalid()
        path.add(closing)
        return path
