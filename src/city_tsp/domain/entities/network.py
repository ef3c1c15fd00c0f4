from __future__ import annotations

import math
from dataclasses import dataclass, field

from city_tsp.domain.distance import haversine


# Core graph types used by the solvers
@dataclass(frozen=True)
class Node:
    id: int = -1  # -1 => unused slot
    label: str = ""
    lat: float = math.inf  # degrees, inf => no coordinates
    lon: float = math.inf

    @property
    def exists(self) -> bool:
        return self.id >= 0

    @property
    def has_coords(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lon)

    def __sub__(self, other: Node) -> float:
        return haversine(self.lat, self.lon, other.lat, other.lon)


@dataclass(frozen=True)
class Edge:
    origin: int = -1
    dest: int = -1
    dist: float = math.inf
    real: bool = False  # given by the input data
    valid: bool = False  # finite distance, i.e. a usable connection

    def reverse(self) -> Edge:
        return Edge(self.dest, self.origin, self.dist, self.real, self.valid)


@dataclass
class Path:
    edges: list[Edge] = field(default_factory=list)
    distance: float = 0.0

    @classmethod
    def invalid(cls) -> Path:
        return cls([], math.inf)

    def __len__(self) -> int:
        return len(self.edges)

    def __lt__(self, other: Path) -> bool:
        return self.distance < other.distance

    def is_valid(self) -> bool:
        return math.isfinite(self.distance)

    def add(self, edge: Edge) -> None:
        self.edges.append(edge)
        self.distance += edge.dist

    def remove_last(self) -> Edge:
        edge = self.edges.pop()
        self.distance -= edge.dist
        return edge

    def copy(self) -> Path:
        return Path(list(self.edges), self.distance)

    def node_order(self) -> list[int]:
        """Visited node ids in order, starting at the first origin."""
        if not self.edges:
            return []
        return [self.edges[0].origin, *(e.dest for e in self.edges)]
