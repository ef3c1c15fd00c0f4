import math

import pytest

from city_tsp.domain.entities.network import Path
from city_tsp.domain.network import CityNetwork
from city_tsp.solvers.backtracking import BacktrackingSolver
from city_tsp.solvers.greedy_edge import GreedyEdgeSolver
from city_tsp.solvers.hooks import NoopHooks
from city_tsp.solvers.nearest_neighbor import NearestNeighborSolver
from city_tsp.solvers.triangular import TriangularApproxSolver, calc_mst

ALL_SOLVERS = [
    BacktrackingSolver,
    TriangularApproxSolver,
    NearestNeighborSolver,
    GreedyEdgeSolver,
]


def _network(edges) -> CityNetwork:
    net = CityNetwork()
    net.load_network_rows([[a, b, d] for a, b, d in edges])
    return net


def _assert_tour(path: Path, net: CityNetwork, root: int = 0):
    assert path.is_valid()
    order = path.node_order()
    assert order[0] == order[-1] == root
    assert sorted(order[:-1]) == net.node_ids()
    for prev, e in zip(path.edges, path.edges[1:]):
        assert prev.dest == e.origin
    assert abs(sum(e.dist for e in path.edges) - path.distance) < 1e-9


# ---------- Fixtures


@pytest.fixture
def square() -> CityNetwork:
    # unique shortest tour 0-1-2-3-0 with total 10; diagonals are expensive
    return _network([(0, 1, 1), (1, 2, 2), (2, 3, 3), (3, 0, 4), (0, 2, 10), (1, 3, 10)])


@pytest.fixture
def unreachable() -> CityNetwork:
    # node 3 has no coordinates and no input edges
    net = CityNetwork()
    net.load_rows(
        [[i, "inf", "inf"] for i in range(4)],
        [[0, 1, 1.0], [1, 2, 1.0], [2, 0, 1.0]],
    )
    return net


# ---------- Scenarios shared by every solver


def test_exact_solver_finds_unique_square_tour(square: CityNetwork):
    path = BacktrackingSolver().solve(square)
    _assert_tour(path, square)
    assert path.distance == 10.0
    assert path.node_order() in ([0, 1, 2, 3, 0], [0, 3, 2, 1, 0])


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_every_solver_finds_square_tour(solver_cls, square: CityNetwork):
    path = solver_cls().solve(square)
    _assert_tour(path, square)
    assert path.distance == 10.0


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_unreachable_node_gives_invalid_path(solver_cls, unreachable: CityNetwork):
    path = solver_cls().solve(unreachable)
    assert not path.is_valid()
    assert path.distance == math.inf


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_single_node_is_trivial_tour(solver_cls):
    net = CityNetwork()
    net.load_rows([[0, 41.0, -8.0]], [])
    path = solver_cls().solve(net)
    assert path.is_valid()
    assert path.distance == 0.0 and len(path) == 0


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_empty_network_is_invalid(solver_cls):
    assert not solver_cls().solve(CityNetwork()).is_valid()


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_two_nodes_go_out_and_back(solver_cls):
    net = _network([(0, 1, 7.5)])
    path = solver_cls().solve(net)
    assert path.is_valid()
    assert path.node_order() == [0, 1, 0]
    assert path.distance == 15.0


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_other_root(solver_cls, square: CityNetwork):
    path = solver_cls(root=2).solve(square)
    _assert_tour(path, square, root=2)
    assert path.distance == 10.0


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_unknown_root_raises(solver_cls, square: CityNetwork):
    from city_tsp.domain.errors import NodeRangeError

    with pytest.raises(NodeRangeError):
        solver_cls(root=9).solve(square)


# ---------- Backtracking


def test_backtracking_ignores_synthesized_edges():
    # path graph 0-1-2 has no Hamiltonian cycle over real edges
    net = _network([(0, 1, 1), (1, 2, 1)])
    assert not BacktrackingSolver().solve(net).is_valid()


def test_backtracking_reports_strict_improvements(square: CityNetwork):
    class TraceHooks(NoopHooks):
        def __init__(self):
            self.seen = []

        def improved(self, *, solver, distance):
            self.seen.append(distance)

    hooks = TraceHooks()
    BacktrackingSolver(hooks=hooks).solve(square)
    assert hooks.seen
    assert hooks.seen[-1] == 10.0
    assert all(a > b for a, b in zip(hooks.seen, hooks.seen[1:]))


def test_backtracking_restores_visits(square: CityNetwork):
    BacktrackingSolver().solve(square)
    assert not any(square.is_visited(i) for i in square.node_ids())


# ---------- Triangular approximation


def test_mst_parents_and_preorder(square: CityNetwork):
    order = calc_mst(square, 0)
    assert order == [0, 1, 2, 3]
    assert [square.get_prev(i) for i in range(4)] == [-1, 0, 1, 2]


def test_mst_preorder_visits_lower_ids_first():
    # star around 0: every leaf hangs off the root
    net = _network([(0, 3, 1), (0, 1, 2), (0, 2, 3), (1, 2, 9), (2, 3, 9), (1, 3, 9)])
    assert calc_mst(net, 0) == [0, 1, 2, 3]
    path = TriangularApproxSolver().solve(net)
    _assert_tour(path, net)
    assert path.distance == 2 + 9 + 9 + 1


def test_triangular_uses_synthesized_hops():
    # tree over real edges is a star, so 1 -> 2 must use the synthesized edge
    net = CityNetwork()
    net.load_rows(
        [[0, 0.0, 0.0], [1, 0.0, 1.0], [2, 0.0, -1.0]],
        [[0, 1, 111000.0], [0, 2, 111000.0]],
    )
    path = TriangularApproxSolver().solve(net)
    _assert_tour(path, net)
    assert [e.real for e in path.edges] == [True, False, True]


def test_mst_ignores_cheaper_synthesized_edge():
    # 1 and 2 sit ~111 m apart but are joined only through the root by real edges
    net = CityNetwork()
    net.load_rows(
        [[0, 0.0, 0.0], [1, 0.0, 1.0], [2, 0.0, 1.001]],
        [[0, 1, 500000.0], [0, 2, 600000.0]],
    )
    assert net.get_edge(1, 2).valid and not net.get_edge(1, 2).real
    assert net.get_edge(1, 2).dist < 500000.0
    assert calc_mst(net, 0) == [0, 1, 2]
    assert [net.get_prev(i) for i in range(3)] == [-1, 0, 0]


def test_triangular_needs_real_spanning_tree():
    # coordinates only: no real edges, so the tree cannot grow past the root
    net = CityNetwork()
    net.load_rows([[0, 0.0, 0.0], [1, 0.0, 1.0], [2, 1.0, 0.0]], [])
    assert not TriangularApproxSolver().solve(net).is_valid()


# ---------- Nearest neighbor


def test_nearest_neighbor_walks_synthesized_edges():
    net = CityNetwork()
    net.load_rows([[0, 0.0, 0.0], [1, 0.0, 1.0], [2, 0.0, 3.0]], [])
    path = NearestNeighborSolver().solve(net)
    _assert_tour(path, net)
    assert path.node_order() == [0, 1, 2, 0]
    assert not NearestNeighborSolver(real_only=True).solve(net).is_valid()


def test_nearest_neighbor_dead_end_is_invalid():
    # greedy takes 0-1 (1) then 1-2 (1), and 2 has no way back to 0 or on to 3
    net = _network([(0, 1, 1), (1, 2, 1), (0, 3, 5), (1, 3, 5)])
    assert not NearestNeighborSolver().solve(net).is_valid()


def test_nearest_neighbor_invalid_closing_edge():
    net = _network([(0, 1, 1), (1, 2, 1)])
    assert not NearestNeighborSolver().solve(net).is_valid()


# ---------- Greedy edge


def test_greedy_edge_does_not_close_subtours_early():
    # two cheap triangles joined by expensive links
    cheap = [(0, 1, 1), (1, 2, 1), (0, 2, 1), (3, 4, 1), (4, 5, 1), (3, 5, 1)]
    links = [(a, b, 10 + a + b) for a in (0, 1, 2) for b in (3, 4, 5)]
    net = _network(cheap + links)
    path = GreedyEdgeSolver().solve(net)
    _assert_tour(path, net)
    assert all(net.is_used(e.origin, e.dest) for e in path.edges)
    used = [(a, b) for a in range(6) for b in range(a + 1, 6) if net.is_used(a, b)]
    assert len(used) == 6
    for n in range(6):
        assert sum(n in pair for pair in used) == 2


def test_greedy_edge_without_enough_edges_is_invalid():
    # star: the center would need degree 3
    net = _network([(0, 1, 1), (0, 2, 1), (0, 3, 1)])
    assert not GreedyEdgeSolver().solve(net).is_valid()
