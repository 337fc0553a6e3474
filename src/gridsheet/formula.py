"""Formula evaluation.

The only supported formula is ``=SUM(a1, b2, ...)``. A formula whose
references cannot be resolved (a missing cell, or a value that is not a
base-10 integer) evaluates to the text ``"NaN"`` as a whole; no partial sum
is ever produced. Referenced formula cells are read by their raw text, never
evaluated recursively, so they too resolve to ``"NaN"``.

Syntax problems are not absorbed: they raise ``ParseError``.
"""

import logging
import re

from .parser import parse_formula

logger = logging.getLogger(__name__)

NAN = 'NaN'

_INTEGER_RE = re.compile(r'^\s*[+-]?[0-9]+\s*\Z')


def parse_int(value):
    """Returns the int for base-10 integer text, or None if it is not one."""
    if not _INTEGER_RE.match(value):
        return None
    return int(value)


def derive_formula(cells, cell):
    """Evaluates a formula cell against the snapshot `cells`.

    Args:
        cells: mapping of address -> Cell the references are resolved in.
        cell: the formula Cell (or its text).

    Returns:
        str: the decimal sum, or "NaN" when a reference does not resolve.
    """
    text = getattr(cell, 'value', cell)
    function = parse_formula(text)

    numbers = []
    for address in function.addresses:
        ref = cells.get(address)
        if ref is None:
            logger.debug("%s: reference %s is empty", text, address)
            return NAN
        number = parse_int(ref.value)
        if number is None:
            logger.debug("%s: reference %s holds non-integer %r", text, address, ref.value)
            return NAN
        numbers.append(number)

    return str(sum(numbers))


evaluate = derive_formula
