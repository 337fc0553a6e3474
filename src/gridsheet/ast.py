# Abstract Syntax Tree (AST) Node classes
# These classes represent the structure of a formula after parsing
class Node:
    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __repr__(self):
        fields = ', '.join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"


# Represents a cell reference (e.g., a1)
class CellReference(Node):
    def __init__(self, address):
        self.address = address  # Cell address (e.g., "a1")


# Represents a function call (e.g., SUM(a1, a2))
class Function(Node):
    def __init__(self, name, args):
        self.name = name  # Function name (e.g., "SUM")
        self.args = args  # List of CellReference nodes

    @property
    def addresses(self):
        return [arg.address for arg in self.args]
