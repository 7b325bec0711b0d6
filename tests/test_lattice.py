import copy

import pytest

from latticad.fill import Fill, FillNode
from latticad.lattice import BorrowedRef, Lattice, OwnedRef
from latticad.vector import Vector
from latticad.xform import Transform


def _pin_grid():
    nodes = [FillNode(universe=u, content=[u]) for u in (1, 2, 3, 4)]
    return Fill.grid((0, 1), (0, 1), (0, 0), nodes)


class TestCellTransforms:
    """placement of lattice cells"""

    def test_three_dims(self):
        lat = Lattice(3, Vector(1,0,0), Vector(0,2,0), Vector(0,0,3), FillNode(1))
        t = lat.get_tx_for_node(1, 2, 3)
        assert isinstance(t, Transform)
        assert not t.has_rotation
        assert t.translation == Vector(1, 4, 9)

    def test_two_dims_ignore_z(self):
        lat = Lattice(2, Vector(1,0,0), Vector(0,1,0), Vector(0,0,99), FillNode(1))
        assert lat.get_tx_for_node(2, 3, 0).translation == Vector(2, 3, 0)
        assert lat.get_tx_for_node(2, 3, 500) == lat.get_tx_for_node(2, 3, 0)

    def test_one_dim_ignores_y_and_z(self):
        lat = Lattice(1, Vector(1.5,0,0), Vector(0,1,0), Vector(0,0,1), FillNode(1))
        assert lat.get_tx_for_node(2, 7, -4).translation == Vector(3.0, 0, 0)

    def test_basis_vectors_accumulate(self):
        # hexagonal style basis: the second vector has an x component
        lat = Lattice(2, Vector(1,0,0), Vector(0.5,1,0), Vector(), FillNode(1))
        assert lat.get_tx_for_node(1, 2, 0).translation == Vector(2.0, 2, 0)

    def test_numpy_coordinates(self):
        np = pytest.importorskip("numpy")
        lat = Lattice(2, Vector(1,0,0), Vector(0,2,0), Vector(), FillNode(1))
        t = lat.get_tx_for_node(np.int64(2), np.int64(3), np.int64(0))
        assert t.translation == Vector(2, 6, 0)

    def test_bad_dims(self):
        for dims in (0, 4, True):
            with pytest.raises(ValueError):
                Lattice(dims, Vector(), Vector(), Vector(), FillNode(1))

    def test_bad_fill(self):
        with pytest.raises(ValueError):
            Lattice(1, Vector(), Vector(), Vector(), 42)
        with pytest.raises(ValueError):
            Lattice.owning(1, Vector(), Vector(), Vector(), FillNode(1))

    def test_tuple_basis(self):
        lat = Lattice(2, (1,0,0), [0,1,0], (0,0,1), FillNode(1))
        assert lat.v1 == Vector(1,0,0)
        assert lat.get_tx_for_node(1, 1, 1).translation == Vector(1, 1, 0)


class TestCellContent:
    """resolution of lattice cell content"""

    def test_single_node_everywhere(self):
        node = FillNode(9)
        lat = Lattice(3, Vector(1,0,0), Vector(0,1,0), Vector(0,0,1), node)
        assert lat.get_fill_for_node(0, 0, 0) == node
        assert lat.get_fill_for_node(-40, 12, 3) == node

    def test_gridded_fill(self):
        fill = _pin_grid()
        lat = Lattice(2, Vector(1,0,0), Vector(0,1,0), Vector(), fill)
        assert lat.get_fill_for_node(0, 0, 0).universe == 1
        assert lat.get_fill_for_node(1, 0, 0).universe == 2
        assert lat.get_fill_for_node(0, 1, 0).universe == 3
        assert lat.get_fill_for_node(1, 1, 0).universe == 4

    def test_cells(self):
        lat = Lattice(2, Vector(2,0,0), Vector(0,2,0), Vector(), _pin_grid())
        cells = list(lat.cells())
        assert len(cells) == 4
        x, y, z, tx, node = cells[3]
        assert (x, y, z) == (1, 1, 0)
        assert tx.translation == Vector(2, 2, 0)
        assert node.universe == 4

    def test_cells_single_node(self):
        lat = Lattice(1, Vector(2,0,0), Vector(), Vector(), FillNode(5))
        cells = list(lat.cells())
        assert len(cells) == 1
        assert cells[0][4].universe == 5
        assert cells[0][3].translation == Vector()


class TestFillOwnership:
    """copy semantics of owned and referenced fills"""

    def test_node_constructor_owns(self):
        lat = Lattice(1, Vector(1,0,0), Vector(), Vector(), FillNode(1))
        assert lat.owns_fill
        assert isinstance(lat._fill, OwnedRef)

    def test_fill_constructor_references(self):
        fill = _pin_grid()
        lat = Lattice(2, Vector(1,0,0), Vector(0,1,0), Vector(), fill)
        assert not lat.owns_fill
        assert isinstance(lat._fill, BorrowedRef)
        assert lat.fill is fill

    def test_copy_of_reference_shares_target(self):
        fill = _pin_grid()
        lat = Lattice(2, Vector(1,0,0), Vector(0,1,0), Vector(), fill)
        for dup in (copy.copy(lat), copy.deepcopy(lat), lat.copy()):
            assert dup is not lat
            assert not dup.owns_fill
            assert dup.fill is fill
            assert dup.get_fill_for_node(1, 1, 0) is fill.get_node(1, 1, 0)

    def test_deepcopy_in_container_shares_reference(self):
        fill = _pin_grid()
        lat = Lattice(2, Vector(1,0,0), Vector(0,1,0), Vector(), fill)
        dup = copy.deepcopy({"core": lat})["core"]
        assert dup is not lat
        assert dup.fill is fill

    def test_copy_of_owned_is_independent(self):
        lat = Lattice(1, Vector(1,0,0), Vector(), Vector(),
                      FillNode(3, content=[1, 2]))
        dup = copy.copy(lat)
        assert dup.owns_fill
        assert dup.fill == lat.fill
        assert dup.fill is not lat.fill

        mine = lat.get_fill_for_node(0, 0, 0)
        theirs = dup.get_fill_for_node(0, 0, 0)
        assert theirs == mine
        assert theirs.content is not mine.content
        theirs.content.append(3)
        assert mine.content == [1, 2]

    def test_owning_constructor_copies(self):
        fill = _pin_grid()
        lat = Lattice.owning(2, Vector(1,0,0), Vector(0,1,0), Vector(), fill)
        assert lat.owns_fill
        assert lat.fill == fill
        assert lat.fill is not fill
        assert lat.get_fill_for_node(1, 0, 0).content is not fill.get_node(1, 0, 0).content

    def test_copy_keeps_geometry(self):
        lat = Lattice(3, Vector(1,0,0), Vector(0,1,0), Vector(0,0,1), _pin_grid())
        dup = lat.copy()
        assert dup.num_finite_dims == 3
        assert (dup.v1, dup.v2, dup.v3) == (lat.v1, lat.v2, lat.v3)
        assert dup.get_tx_for_node(1, 1, 0) == lat.get_tx_for_node(1, 1, 0)

    def test_assign(self):
        fill = _pin_grid()
        src = Lattice(2, Vector(1,0,0), Vector(0,1,0), Vector(), fill)
        dst = Lattice(1, Vector(5,0,0), Vector(), Vector(), FillNode(8))
        assert dst.assign(src) is dst
        assert dst.num_finite_dims == 2
        assert dst.v1 == Vector(1,0,0)
        assert dst.fill is fill
        assert not dst.owns_fill

        owner = Lattice(1, Vector(1,0,0), Vector(), Vector(), FillNode(4, content=[0]))
        dst.assign(owner)
        assert dst.owns_fill
        assert dst.fill == owner.fill
        assert dst.fill is not owner.fill

    def test_self_assign(self):
        lat = Lattice(1, Vector(1,0,0), Vector(), Vector(), FillNode(4))
        held = lat.fill
        lat.assign(lat)
        assert lat.fill is held

    def test_refs_directly(self):
        data = [1, 2]
        owned = OwnedRef(data)
        borrowed = BorrowedRef(data)
        assert owned.get_data() is data
        assert owned.clone().get_data() == data
        assert owned.clone().get_data() is not data
        assert borrowed.clone().get_data() is data
        assert owned.owns_data and not borrowed.owns_data


def test_lattice_str():
    lat = Lattice(1, Vector(1,0,0), Vector(), Vector(), FillNode(4))
    assert str(lat) == "[lattice 1d v1 (1, 0, 0) v2 (0.0, 0.0, 0.0) v3 (0.0, 0.0, 0.0) owned fill universe 4]"
