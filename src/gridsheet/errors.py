"""Exception classes raised by the spreadsheet engine.

Every error derives from ``SheetError`` and also from the built-in exception
that fits the same situation, so callers that catch ``ValueError`` or
``SyntaxError`` keep working.

    SheetError
    ├── MalformedAddress   (ValueError)
    ├── ParseError         (SyntaxError)
    │   └── UnsupportedFormula
    ├── InvalidRowNumber   (ValueError)
    └── Conflict

A formula whose *references* cannot be resolved is not an error: it evaluates
to the "NaN" sentinel (see ``gridsheet.formula``).
"""


class SheetError(Exception):
    pass


# Raised by the address codec and propagated unchanged by every caller
class MalformedAddress(SheetError, ValueError):
    def __init__(self, address, reason=None):
        self.address = address
        self.reason = reason
        message = f"Invalid cell reference: '{address}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ParseError(SheetError, SyntaxError):
    def __init__(self, message, formula=None, position=None):
        self.formula = formula
        self.position = position
        if position is not None:
            message = f"{message} at column {position}"
        super().__init__(message)


# Well-formed =NAME(...) whose NAME is not a supported function
class UnsupportedFormula(ParseError):
    def __init__(self, name, formula=None, position=None):
        self.name = name
        super().__init__(f"Unsupported function '{name}'", formula, position)


class InvalidRowNumber(SheetError, ValueError):
    def __init__(self, row):
        self.row = row
        super().__init__(f"Invalid row number: {row!r}")


class Conflict(SheetError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Edit computed against version {expected}, but the sheet is at version {actual}")
