# solvers/triangular.py
import heapq

from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork
from city_tsp.solvers.common import degenerate_tour, tour_from_order


def calc_mst(network: CityNetwork, root: int) -> list[int]:
    """
    Lazy Prim's over real edges, rooted at `root`. Leaves each tree node's parent
    in network prev pointers and returns the tree's preorder (lower ids first).
    Nodes the real edges cannot reach are absent from the result.
    """
    network.clear_visits()
    network.clear_prevs()

    q: list[tuple[float, int, int]] = [(0.0, root, -1)]
    while q:
        _, node, source = heapq.heappop(q)
        if network.is_visited(node):
            continue
        network.visit(node)
        network.set_prev(node, source)
        dist = network.distances(node)
        for nxt in network.unvisited(network.neighbors(node, real_only=True)):
            heapq.heappush(q, (float(dist[nxt]), int(nxt), node))

    order: list[int] = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(int(c) for c in network.children(node)[::-1])
    return order


class TriangularApproxSolver:
    """
    MST preorder tour: a 2-approximation when distances obey the triangle inequality.
    O(E log V). Hops between consecutive preorder nodes may use synthesized edges.
    """

    name = "triangular"

    def __init__(self, *, root: int = 0):
        self.root = root

    def solve(self, network: CityNetwork) -> Path:
        trivial = degenerate_tour(network, self.root)
        if trivial is not None:
            return trivial

        order = calc_mst(network, self.root)
        if len(order) < network.node_count:
            return Path.invalid()
        return tour_from_order(network, order)
