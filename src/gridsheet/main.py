import re

from .render import format_grid, to_csv
from .store import InsertRow, UpdateCell

_INSERT_RE = re.compile(r'^\+row:(-?\d+)(?::(before|after))?$')


def parse_command(text):
    """Parses a textual edit command.

    'b1=1000' sets a cell (everything after the first '=' is the value, so
    'b2==SUM(a1, a2)' stores a formula). '+row:2:before' and '+row:1:after'
    insert a row; the position defaults to 'after'.
    """
    text = text.strip()
    m = _INSERT_RE.match(text)
    if m:
        at, position = m.groups()
        return InsertRow(int(at), position or 'after')
    index, sep, value = text.partition('=')
    if not sep or not index.strip():
        raise ValueError(f"Invalid command: '{text}'")
    return UpdateCell(index.strip(), value)


def run_sheet(sheet, commands=(), debug=False):
    """Apply edit commands to a sheet and print the resulting grid.

    Args:
        sheet (Sheet): The sheet to edit; it keeps every intermediate version
        commands (iterable): Textual edit commands, see parse_command
        debug (bool): If True, also outputs the grid state in CSV format

    Returns:
        str: The CSV output if debug is True, otherwise None
    """
    for text in commands:
        command = parse_command(text)
        version = sheet.apply(command)
        print(f"v{version}: {command!r}")

    print(f"\nGrid State (version {sheet.version} of {sheet.head}):")
    print(format_grid(sheet.current))

    if debug:
        csv_output = to_csv(sheet.current)
        print("\nGrid State (CSV format):")
        print(csv_output)
        return csv_output
    return None
