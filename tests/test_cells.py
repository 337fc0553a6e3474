import pytest

from gridsheet.cells import (
    Cell, CellType, Dimensions, Snapshot, calc_dimensions, cells_from_dict, cells_to_dict, classify
)
from gridsheet.errors import MalformedAddress
from gridsheet.utils import col_to_num, split_cell

from conftest import make_cells


def test_classify():
    assert classify('=SUM(a1)') is CellType.FORMULA
    assert classify('100') is CellType.PRIMITIVE
    assert classify('') is CellType.PRIMITIVE
    assert classify(' =SUM(a1)') is CellType.PRIMITIVE


def test_cell_from_value_derives_type():
    assert Cell.from_value('=SUM(a1)') == Cell('=SUM(a1)', 'formula')
    assert Cell.from_value('7').type == CellType.PRIMITIVE
    assert Cell.blank() == Cell('', 'primitive')
    with pytest.raises(TypeError):
        Cell.from_value(7)


def test_cell_type_cannot_contradict_value():
    with pytest.raises(ValueError):
        Cell('=SUM(b1)', CellType.PRIMITIVE)
    with pytest.raises(ValueError):
        Cell('100', 'formula')
    with pytest.raises(ValueError):
        Cell('100', 'number')
    with pytest.raises(ValueError):
        Cell.blank()._replace(value='=SUM(a1)', type=CellType.PRIMITIVE)


def test_cell_type_is_always_the_enum():
    assert Cell('1', 'primitive').type is CellType.PRIMITIVE
    assert Cell('=SUM(a1)').type is CellType.FORMULA


def test_snapshot_rejects_forged_cell_types():
    forged = tuple.__new__(Cell, ('=SUM(b1)', CellType.PRIMITIVE))
    with pytest.raises(ValueError):
        Snapshot({'a1': forged})
    with pytest.raises(ValueError):
        Snapshot({'a1': tuple.__new__(Cell, ('1', 'primitive'))})


def test_snapshot_built_from_cells_serializes():
    cells = Snapshot({'a1': Cell('1', 'primitive'), 'b1': Cell('=SUM(a1)', 'formula')})
    assert cells_to_dict(cells) == {
        'a1': {'value': '1', 'type': 'primitive'},
        'b1': {'value': '=SUM(a1)', 'type': 'formula'},
    }


def test_calc_dimensions(sample_cells):
    assert calc_dimensions(sample_cells) == Dimensions(rows=2, cols=2)


def test_calc_dimensions_empty():
    assert calc_dimensions({}) == Dimensions(0, 0)
    assert calc_dimensions(Snapshot()) == (0, 0)


def test_calc_dimensions_sparse():
    cells = make_cells(c5='1', a2='2')
    assert calc_dimensions(cells) == Dimensions(rows=5, cols=3)


def test_calc_dimensions_ranks_columns_alphabetically():
    cells = make_cells(z1='1', b3='2')
    assert calc_dimensions(cells).cols == 26


def test_calc_dimensions_covers_every_address():
    cells = make_cells(a1='1', d2='', b9='x', z3='=SUM(a1)', m14='4')
    dims = calc_dimensions(cells)
    for key in cells:
        col, row = split_cell(key)
        assert dims.rows >= row
        assert dims.cols >= col_to_num(col) + 1


def test_calc_dimensions_propagates_malformed_keys():
    with pytest.raises(MalformedAddress):
        calc_dimensions({'aa1': Cell.blank()})


def test_snapshot_is_read_only(sample_cells):
    with pytest.raises(TypeError):
        sample_cells['a1'] = Cell.blank()
    assert not hasattr(sample_cells, '__setitem__')


def test_snapshot_validates_contents():
    with pytest.raises(MalformedAddress):
        Snapshot({'A1': Cell.blank()})
    with pytest.raises(TypeError):
        Snapshot({'a1': '100'})


def test_snapshot_equals_plain_mapping():
    assert make_cells(a1='1') == {'a1': Cell('1', 'primitive')}


def test_cells_from_dict():
    cells = cells_from_dict({
        'a1': {'value': '100', 'type': 'primitive'},
        'b2': {'value': '=SUM(a1)', 'type': 'formula'},
        'c1': '3',
    })
    assert cells['a1'] == Cell('100', CellType.PRIMITIVE)
    assert cells['b2'].is_formula
    assert cells['c1'].value == '3'


def test_cells_from_dict_rederives_type():
    cells = cells_from_dict({'a1': {'value': '=SUM(a2)', 'type': 'primitive'}})
    assert cells['a1'].type is CellType.FORMULA


@pytest.mark.parametrize('data', [
    {'a1': 100},
    {'a1': {'type': 'primitive'}},
    {'a1': {'value': None}},
    ['a1'],
])
def test_cells_from_dict_rejects_bad_values(data):
    with pytest.raises(ValueError):
        cells_from_dict(data)


def test_cells_to_dict(sample_cells):
    data = cells_to_dict(sample_cells)
    assert data['b2'] == {'value': '=SUM(a1, a2)', 'type': 'formula'}
    assert cells_from_dict(data) == sample_cells
