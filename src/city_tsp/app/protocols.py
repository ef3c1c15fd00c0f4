from typing import Protocol, runtime_checkable

from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork


@runtime_checkable
class Solver(Protocol):
    """
    Responsibilities:
      • Build a tour over every node of the network, starting and ending at the root.
      • Return Path.invalid() when no tour exists; never raise for that case.
    Solvers reset the transient network state they use on entry.
    """

    name: str

    def solve(self, network: CityNetwork) -> Path: ...


@runtime_checkable
class Sink(Protocol):
    def write(self, rec) -> None: ...
