# solvers/backtracking.py
import sys
from dataclasses import dataclass, field

from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork
from city_tsp.solvers.common import degenerate_tour
from city_tsp.solvers.hooks import NoopHooks, SolverHooks


@dataclass
class _SearchState:
    network: CityNetwork
    root: int
    target_len: int  # edges before the closing hop
    current: Path = field(default_factory=Path)
    best: Path = field(default_factory=Path.invalid)


class BacktrackingSolver:
    """
    Exhaustive depth-first search over tours that only use real edges.

    Worst case O((V - 1)!), so only small instances are practical. With prune=True
    a partial tour is abandoned once it is already no shorter than the best
    complete one; the result is the same, only found sooner.
    """

    name = "backtracking"

    def __init__(self, *, root: int = 0, prune: bool = False, hooks: SolverHooks | None = None):
        self.root, self.prune = root, prune
        self.hooks = hooks or NoopHooks()

    def solve(self, network: CityNetwork) -> Path:
        trivial = degenerate_tour(network, self.root)
        if trivial is not None:
            return trivial

        network.clear_visits()
        state = _SearchState(network, self.root, target_len=network.node_count - 1)
        # one frame per node on the current path, plus headroom
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(limit, network.node_count + 100))
        try:
            network.visit(self.root)
            self._extend(state, self.root)
        finally:
            sys.setrecursionlimit(limit)
            network.clear_visits()
        return state.best

    def _extend(self, state: _SearchState, curr: int) -> None:
        net, path = state.network, state.current
        if len(path) == state.target_len:
            closing = net.get_edge(curr, state.root)
            if closing.real and closing.valid:
                path.add(closing)
                if path < state.best:
                    state.best = path.copy()
                    self.hooks.improved(solver=self.name, distance=state.best.distance)
                path.remove_last()
            return

        if self.prune and not path < state.best:
            return

        for nxt in net.unvisited(net.neighbors(curr, real_only=True)):
            nxt = int(nxt)
            net.visit(nxt)
            path.add(net.get_edge(curr, nxt))
            self._extend(state, nxt)
            path.remove_last()
            net.unvisit(nxt)
