from .ast import CellReference, Function
from .errors import ParseError, UnsupportedFormula
from .lexer import Lexer


# Parser class converts formula tokens into an Abstract Syntax Tree (AST)
#
#   formula   := '=' NAME '(' arguments ')'
#   arguments := CELL_ADDRESS (',' CELL_ADDRESS)*
#
# Only NAME == 'SUM' is supported.
class Parser:
    def __init__(self, tokens, text=None):
        self.tokens = tokens
        self.text = text
        self.pos = 0

    def parse(self):
        if not self._match('EQUALS'):
            raise self._error("Formula must start with '='")
        self.pos += 1

        if not (self._match('FUNCTION') or self._match('IDENTIFIER')):
            raise self._error("Expected function name after '='")
        name_token = self.tokens[self.pos]
        self.pos += 1

        if not self._match('LPAREN'):
            raise self._error(f"Expected '(' after {name_token.value}")
        self.pos += 1

        if name_token.type != 'FUNCTION':
            raise UnsupportedFormula(name_token.value, self.text, name_token.column)

        args = self._arguments()

        if not self._match('RPAREN'):
            raise self._error("Expected ',' or ')'")
        self.pos += 1

        if self.pos < len(self.tokens):
            raise self._error("Unexpected input after ')'")
        return Function(name_token.value, args)

    def _arguments(self):
        args = []
        while True:
            if not self._match('CELL_ADDRESS'):
                raise self._error("Expected cell address")
            args.append(CellReference(self.tokens[self.pos].value))
            self.pos += 1
            if not self._match('COMMA'):
                return args
            self.pos += 1

    def _match(self, type, value=None):
        if self.pos < len(self.tokens) and self.tokens[self.pos].type == type:
            if value is None or self.tokens[self.pos].value == value:
                return True
        return False

    def _error(self, message):
        if self.pos < len(self.tokens):
            return ParseError(message, self.text, self.tokens[self.pos].column)
        return ParseError(f"{message} at end of input", self.text)


def parse_formula(text):
    """Parses formula text such as '=SUM(a1, a2)' into a Function node.

    Raises:
        ParseError: the text is not shaped like '=NAME(a1, ...)'.
        UnsupportedFormula: the shape is fine but NAME is not 'SUM'.
    """
    tokens = Lexer(text).tokenize()
    return Parser(tokens, text).parse()
