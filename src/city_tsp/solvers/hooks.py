# solvers/hooks.py
from typing import Protocol


class SolverHooks(Protocol):
    def solve_start(self, *, solver: str, nodes: int): ...
    def solve_end(
        self, *, solver: str, distance: float, valid: bool, hops: int, wall_ms: float
    ): ...
    def improved(self, *, solver: str, distance: float): ...
    def error(self, *, solver: str, exc: BaseException, **kw): ...


class NoopHooks:
    def solve_start(self, **_):
        pass

    def solve_end(self, **_):
        pass

    def improved(self, **_):
        pass

    def error(self, *_, **__):
        pass
