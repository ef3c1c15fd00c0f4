# io/report.py
from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork

INVALID_PATH = "Invalid path (no tour found)"


def format_network(network: CityNetwork) -> str:
    return (
        f"Nodes: {network.node_count}\n"
        f"Edges: {network.edge_count}\n"
        f"Synthesized edges: {network.fake_edge_count}"
    )


def _name(network: CityNetwork | None, node_id: int) -> str:
    if network is not None and network.node_exists(node_id):
        label = network.get_node(node_id).label
        if label:
            return f"{node_id} ({label})"
    return str(node_id)


def format_path(path: Path, network: CityNetwork | None = None) -> str:
    """One `origin -> dest (dist)` line per hop, then the total; labels shown when known."""
    if not path.is_valid():
        return INVALID_PATH
    lines = [
        f"{_name(network, e.origin)} -> {_name(network, e.dest)} ({e.dist:.2f})"
        + ("" if e.real else " [synthesized]")
        for e in path.edges
    ]
    lines.append(f"Total distance: {path.distance:.2f}")
    return "\n".join(lines)
