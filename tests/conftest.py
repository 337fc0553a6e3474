import pytest

from gridsheet.cells import Cell, Snapshot


def make_cells(**values):
    return Snapshot({key: Cell.from_value(value) for key, value in values.items()})


@pytest.fixture
def sample_cells():
    # The four-cell sheet used throughout: b2 sums column a
    return make_cells(a1='100', a2='200', b1='300', b2='=SUM(a1, a2)')
