# solvers/greedy_edge.py
import heapq

import numpy as np

from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork
from city_tsp.solvers.common import degenerate_tour


def select_edges(network: CityNetwork) -> bool:
    """
    Mark (network.use) the edges of a greedy tour: cheapest valid edges first, at
    most two per node, and no cycle until the edge that closes the whole tour.
    Returns False when the valid edges cannot form a single cycle.
    """
    ids = network.node_ids()
    network.clear_uses()

    q: list[tuple[float, int, int]] = []
    for k, i in enumerate(ids):
        dist = network.distances(i)
        for j in ids[k + 1 :]:
            if np.isfinite(dist[j]):
                q.append((float(dist[j]), i, j))
    heapq.heapify(q)

    degree = np.zeros(network.capacity, dtype=np.int8)
    comp = np.arange(network.capacity)
    unfinished = len(ids)  # nodes with degree < 2
    while q and unfinished:
        _, i, j = heapq.heappop(q)
        if degree[i] == 2 or degree[j] == 2:
            continue
        if comp[i] == comp[j] and unfinished != 2:
            continue

        comp[comp == comp[j]] = comp[i]
        network.use(i, j)
        for n in (i, j):
            degree[n] += 1
            if degree[n] == 2:
                unfinished -= 1
    return unfinished == 0


class GreedyEdgeSolver:
    """
    Globally greedy edge selection followed by a walk along the chosen edges.
    O(V^2 log V) for the edge queue; re-tagging components is O(V) per accepted edge.
    """

    name = "greedy_edge"

    def __init__(self, *, root: int = 0):
        self.root = root

    def solve(self, network: CityNetwork) -> Path:
        trivial = degenerate_tour(network, self.root)
        if trivial is not None:
            return trivial
        if network.node_count == 2:
            return self._out_and_back(network)

        if not select_edges(network):
            return Path.invalid()

        network.clear_visits()
        network.visit(self.root)
        path, curr = Path(), self.root
        for _ in range(network.node_count - 1):
            nxt = int(network.unvisited(network.used_neighbors(curr))[0])
            path.add(network.get_edge(curr, nxt))
            network.visit(nxt)
            curr = nxt
        path.add(network.get_edge(curr, self.root))
        return path

    def _out_and_back(self, network: CityNetwork) -> Path:
        # two nodes share one edge, so degree 2 is unreachable; walk it both ways
        other = next(i for i in network.node_ids() if i != self.root)
        edge = network.get_edge(self.root, other)
        if not edge.valid:
            return Path.invalid()
        network.clear_uses()
        network.use(self.root, other)
        return Path([edge, edge.reverse()], 2 * edge.dist)
