# city_tsp/domain/network.py
import logging
import math
from collections.abc import Sequence
from enum import Enum

import numpy as np

from city_tsp.domain.distance import haversine_matrix
from city_tsp.domain.entities.network import Edge, Node
from city_tsp.domain.errors import NetworkFormatError, NodeRangeError
from city_tsp.io import csv_reader

log = logging.getLogger(__name__)

Row = Sequence[object]


class GraphType(Enum):
    NORMAL = "normal"  # origin,dest,dist
    LABELED = "labeled"  # origin,dest,dist,origin_label,dest_label
    LAT_LON = "lat_lon"  # nodes.csv + edges.csv


_WIDTHS = {3: GraphType.NORMAL, 5: GraphType.LABELED}


def _is_header(row: Row) -> bool:
    return bool(row) and str(row[0]).strip()[:1].isalpha()


def _cell(row: Row, i: int) -> str:
    return str(row[i]).strip()


def _parse_id(row: Row, i: int, source: str, line: int) -> int:
    try:
        node_id = int(_cell(row, i))
    except ValueError:
        raise NetworkFormatError(source, line, f"node id {row[i]!r} is not an integer")
    if node_id < 0:
        raise NodeRangeError(node_id, f"{source}:{line}: negative node id")
    return node_id


def _parse_float(row: Row, i: int, source: str, line: int, what: str) -> float:
    try:
        return float(_cell(row, i))
    except ValueError:
        raise NetworkFormatError(source, line, f"{what} {row[i]!r} is not a number")


def _check_width(row: Row, width: int, source: str, line: int) -> None:
    if len(row) != width:
        raise NetworkFormatError(source, line, f"expected {width} fields, got {len(row)}")


def _max_id(rows: Sequence[Row], columns: tuple[int, ...]) -> int:
    """Largest plain non-negative id in `columns`; -1 when there is none."""
    top = -1
    for row in rows:
        for i in columns:
            cell = _cell(row, i) if i < len(row) else ""
            if cell.isdigit():
                top = max(top, int(cell))
    return top


class CityNetwork:
    """
    Dense, symmetric edge table over contiguous node ids.

    Cell (i, j) holds the edge i -> j. Real edges come from the input data; after
    loading, complete_edges() fills every other pair of known nodes with a
    synthesized edge (haversine distance when both nodes carry coordinates,
    otherwise an invalid infinite one).

    Transient solver state (visited, prev, used) lives here too, so only one
    solve may run against an instance at a time.
    """

    def __init__(self, dataset_path: str | None = None, is_directory: bool = False):
        self.clear_data()
        if dataset_path is not None:
            self.initialize_data(dataset_path, is_directory)

    # ---------------- Loading -------------------------------

    def clear_data(self) -> None:
        self.graph_type = GraphType.NORMAL
        self.nodes: list[Node] = []
        self.node_count = 0
        self.edge_count = 0
        self.fake_edge_count = 0
        self._completed = False
        self._dist = np.full((0, 0), np.inf)
        self._real = np.zeros((0, 0), dtype=bool)
        self._valid = np.zeros((0, 0), dtype=bool)
        self._used = np.zeros((0, 0), dtype=bool)
        self._visited = np.zeros(0, dtype=bool)
        self._prev = np.full(0, -1, dtype=np.int64)

    def initialize_data(self, dataset_path: str, is_directory: bool) -> None:
        """Load a dataset directory (nodes.csv + edges.csv) or a single edge table."""
        if is_directory:
            nodes_csv, edges_csv = csv_reader.dataset_files(dataset_path)
            self.load_rows(
                csv_reader.read(nodes_csv),
                csv_reader.read(edges_csv),
                nodes_source=nodes_csv,
                edges_source=edges_csv,
            )
        else:
            self.load_network_rows(csv_reader.read(dataset_path), source=dataset_path)

    def load_rows(
        self,
        node_rows: Sequence[Row],
        edge_rows: Sequence[Row],
        *,
        nodes_source: str = "<nodes>",
        edges_source: str = "<edges>",
    ) -> None:
        """Nodes as (id, latitude, longitude), edges as (origin, dest, distance)."""
        self.clear_data()
        try:
            self.graph_type = GraphType.LAT_LON
            self._reserve(_max_id(node_rows, (0,)) + 1)
            self._initialize_nodes(node_rows, nodes_source)
            self._initialize_edges(edge_rows, edges_source, implicit_nodes=False)
            self.complete_edges()
        except Exception:
            self.clear_data()
            raise
        self._log_loaded(edges_source)

    def load_network_rows(self, rows: Sequence[Row], *, source: str = "<rows>") -> None:
        """
        One combined edge table. Row width picks the layout (3 = plain, 5 = labeled);
        a first row starting with a letter is treated as a header.
        """
        self.clear_data()
        try:
            if rows:
                width = len(rows[0])
                if width not in _WIDTHS:
                    raise NetworkFormatError(source, 1, f"expected 3 or 5 fields, got {width}")
                self.graph_type = _WIDTHS[width]
                self._reserve(_max_id(rows, (0, 1)) + 1)
            self._initialize_edges(rows, source, implicit_nodes=True)
            self.complete_edges()
        except Exception:
            self.clear_data()
            raise
        self._log_loaded(source)

    def _initialize_nodes(self, rows: Sequence[Row], source: str) -> None:
        for line, row in enumerate(rows, start=1):
            if line == 1 and _is_header(row):
                continue
            _check_width(row, 3, source, line)
            node_id = _parse_id(row, 0, source, line)
            lat = _parse_float(row, 1, source, line, "latitude")
            lon = _parse_float(row, 2, source, line, "longitude")
            self.add_node(Node(node_id, lat=lat, lon=lon))

    def _initialize_edges(self, rows: Sequence[Row], source: str, *, implicit_nodes: bool) -> None:
        width = 5 if self.graph_type is GraphType.LABELED else 3
        for line, row in enumerate(rows, start=1):
            if line == 1 and _is_header(row):
                continue
            _check_width(row, width, source, line)
            origin = _parse_id(row, 0, source, line)
            dest = _parse_id(row, 1, source, line)
            dist = _parse_float(row, 2, source, line, "distance")
            if dist < 0:
                raise NetworkFormatError(source, line, f"negative distance {dist}")
            if implicit_nodes:
                labels = (_cell(row, 3), _cell(row, 4)) if width == 5 else ("", "")
                for node_id, label in zip((origin, dest), labels):
                    if not self.node_exists(node_id):
                        self.add_node(Node(node_id, label=label))
            elif not (self.node_exists(origin) and self.node_exists(dest)):
                bad = dest if self.node_exists(origin) else origin
                raise NodeRangeError(bad, f"{source}:{line}: edge references unknown node")
            self.add_edge(origin, dest, dist)

    def _log_loaded(self, source: str) -> None:
        log.info(
            "network_loaded",
            extra={
                "extra": {
                    "source": source,
                    "graph_type": self.graph_type.value,
                    "nodes": self.node_count,
                    "edges": self.edge_count,
                    "fake_edges": self.fake_edge_count,
                }
            },
        )

    # ---------------- Construction --------------------------

    @property
    def capacity(self) -> int:
        return len(self.nodes)

    def _reserve(self, size: int) -> None:
        grow = size - self.capacity
        if grow <= 0:
            return
        pad2 = ((0, grow), (0, grow))
        self._dist = np.pad(self._dist, pad2, constant_values=np.inf)
        self._real = np.pad(self._real, pad2, constant_values=False)
        self._valid = np.pad(self._valid, pad2, constant_values=False)
        self._used = np.pad(self._used, pad2, constant_values=False)
        self._visited = np.pad(self._visited, (0, grow), constant_values=False)
        self._prev = np.pad(self._prev, (0, grow), constant_values=-1)
        self.nodes.extend(Node() for _ in range(grow))

    def _check_open(self) -> None:
        if self._completed:
            raise RuntimeError("edges already completed; reload the network to change it")

    def add_node(self, node: Node) -> None:
        self._check_open()
        if node.id < 0:
            raise NodeRangeError(node.id, "negative node id")
        self._reserve(node.id + 1)
        if not self.nodes[node.id].exists:
            self.node_count += 1
        self.nodes[node.id] = node

    def add_edge(self, origin: int, dest: int, dist: float) -> None:
        """Install origin <-> dest as a real edge (both directions)."""
        self._check_open()
        self._check(origin, dest)
        if origin == dest:
            log.warning("self_loop_ignored", extra={"extra": {"node": origin}})
            return
        if not self._real[origin, dest]:
            self.edge_count += 1
        for a, b in ((origin, dest), (dest, origin)):
            self._dist[a, b] = dist
            self._real[a, b] = True
            self._valid[a, b] = math.isfinite(dist)

    def complete_edges(self) -> None:
        """Synthesize an edge for every pair of known nodes lacking a real one."""
        self._check_open()
        self._completed = True
        ids = self.node_ids()
        if len(ids) < 2:
            return
        lat = np.array([self.nodes[i].lat for i in ids])
        lon = np.array([self.nodes[i].lon for i in ids])
        geo = haversine_matrix(lat, lon)

        sub = np.ix_(ids, ids)
        missing = ~self._real[sub]
        np.fill_diagonal(missing, False)
        self._dist[sub] = np.where(missing, geo, self._dist[sub])
        self._valid[sub] = np.where(missing, np.isfinite(geo), self._valid[sub])
        self.fake_edge_count += int(np.count_nonzero(np.triu(missing, k=1)))

    # ---------------- Queries -------------------------------

    def node_exists(self, node_id: int) -> bool:
        return 0 <= node_id < self.capacity and self.nodes[node_id].exists

    def _check(self, *node_ids: int) -> None:
        for node_id in node_ids:
            if not self.node_exists(node_id):
                raise NodeRangeError(node_id)

    def node_ids(self) -> list[int]:
        return [n.id for n in self.nodes if n.exists]

    def get_node(self, node_id: int) -> Node:
        self._check(node_id)
        return self.nodes[node_id]

    def _edge(self, a: int, b: int) -> Edge:
        if a == b or not (self.nodes[a].exists and self.nodes[b].exists):
            return Edge()
        return Edge(a, b, float(self._dist[a, b]), bool(self._real[a, b]), bool(self._valid[a, b]))

    def get_edge(self, a: int, b: int) -> Edge:
        self._check(a, b)
        return self._edge(a, b)

    def get_adjacent(self, node_id: int) -> list[Edge]:
        """Full row of edges out of node_id, invalid ones included."""
        self._check(node_id)
        return [self._edge(node_id, j) for j in range(self.capacity)]

    def neighbors(self, node_id: int, *, real_only: bool = False) -> np.ndarray:
        """Ids reachable from node_id by a valid (and optionally real) edge, ascending."""
        self._check(node_id)
        mask = self._valid[node_id] & self._real[node_id] if real_only else self._valid[node_id]
        return np.flatnonzero(mask)

    def distances(self, node_id: int) -> np.ndarray:
        row = self._dist[node_id].view()
        row.flags.writeable = False
        return row

    # ---------------- Transient solver state ----------------

    def clear_visits(self) -> None:
        self._visited[:] = False

    def visit(self, node_id: int) -> None:
        self._check(node_id)
        self._visited[node_id] = True

    def unvisit(self, node_id: int) -> None:
        self._check(node_id)
        self._visited[node_id] = False

    def is_visited(self, node_id: int) -> bool:
        self._check(node_id)
        return bool(self._visited[node_id])

    def unvisited(self, node_ids: np.ndarray) -> np.ndarray:
        return node_ids[~self._visited[node_ids]]

    def clear_prevs(self) -> None:
        self._prev[:] = -1

    def set_prev(self, node_id: int, prev: int) -> None:
        self._check(node_id)
        self._prev[node_id] = prev

    def get_prev(self, node_id: int) -> int:
        self._check(node_id)
        return int(self._prev[node_id])

    def unset_prev(self, node_id: int) -> None:
        self.set_prev(node_id, -1)

    def children(self, node_id: int) -> np.ndarray:
        """Ids whose prev pointer is node_id, ascending."""
        return np.flatnonzero(self._prev == node_id)

    def clear_uses(self) -> None:
        self._used[:] = False

    def use(self, a: int, b: int) -> None:
        self._check(a, b)
        self._used[a, b] = self._used[b, a] = True

    def is_used(self, a: int, b: int) -> bool:
        self._check(a, b)
        return bool(self._used[a, b])

    def used_neighbors(self, node_id: int) -> np.ndarray:
        return np.flatnonzero(self._used[node_id])
