import math

from city_tsp.domain.entities.network import Edge, Path


def test_add_and_remove_last_are_inverse():
    p = Path()
    p.add(Edge(0, 1, 2.5, True, True))
    p.add(Edge(1, 2, 4.0, True, True))
    assert len(p) == 2
    assert abs(p.distance - 6.5) < 1e-12
    last = p.remove_last()
    assert last.dest == 2
    assert abs(p.distance - 2.5) < 1e-12
    p.remove_last()
    assert p.distance == 0.0 and len(p) == 0


def test_invalid_path_and_ordering():
    bad = Path.invalid()
    assert not bad.is_valid()
    assert bad.distance == math.inf
    good = Path([Edge(0, 1, 3.0, True, True)], 3.0)
    assert good.is_valid()
    assert good < bad
    assert not bad < good
    # strict: equal distances are not "less"
    assert not good < Path([], 3.0)


def test_copy_is_independent():
    p = Path()
    p.add(Edge(0, 1, 1.0, True, True))
    snap = p.copy()
    p.add(Edge(1, 0, 1.0, True, True))
    assert len(snap) == 1 and snap.distance == 1.0


def test_default_edge_and_reverse():
    e = Edge()
    assert (e.origin, e.dest, e.real, e.valid) == (-1, -1, False, False)
    assert e.dist == math.inf
    r = Edge(3, 7, 12.0, False, True).reverse()
    assert (r.origin, r.dest, r.dist, r.real, r.valid) == (7, 3, 12.0, False, True)


def test_node_order():
    edges = [Edge(0, 2, 1.0, True, True), Edge(2, 1, 1.0, True, True), Edge(1, 0, 1.0, True, True)]
    p = Path(edges, 3.0)
    assert p.node_order() == [0, 2, 1, 0]
    assert Path().node_order() == []
