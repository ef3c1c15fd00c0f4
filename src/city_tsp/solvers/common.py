from collections.abc import Sequence

from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork


def degenerate_tour(network: CityNetwork, root: int) -> Path | None:
    """
    Answer for networks too small to search: no nodes -> invalid, a lone root ->
    an empty zero-length tour. Returns None when a real search is needed.
    """
    if network.node_count == 0:
        return Path.invalid()
    network.get_node(root)  # unknown root is a caller error
    if network.node_count == 1:
        return Path()
    return None


def tour_from_order(network: CityNetwork, order: Sequence[int]) -> Path:
    """Link consecutive ids with their table edges and close back to the first."""
    path = Path()
    for a, b in zip(order, [*order[1:], order[0]]):
        edge = network.get_edge(a, b)
        if not edge.valid:
            return Path.invalid()
        path.add(edge)
    return path
