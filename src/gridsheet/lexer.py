from .errors import MalformedAddress, ParseError
from .utils import validate_cell_ref


# Token class represents a single token in the formula text with position tracking
# Used by the lexer to break down formula text into meaningful units
class Token:
    def __init__(self, type, value, column=1):
        self.type = type      # Token type (e.g., FUNCTION, CELL_ADDRESS, COMMA)
        self.value = value    # Actual value of the token
        self.column = column  # 1-based column in the formula text

    def __eq__(self, other):
        return isinstance(other, Token) and (self.type, self.value) == (other.type, other.value)

    def __repr__(self):
        return f"Token({self.type}, {self.value!r}, col={self.column})"

    __str__ = __repr__


PUNCTUATION = {
    '(': 'LPAREN',
    ')': 'RPAREN',
    ',': 'COMMA',
}


# Lexer class breaks down a formula such as "=SUM(a1, a2)" into tokens
class Lexer:
    def __init__(self, text):
        self.text = text          # Formula text, including the leading '='
        self.pos = 0              # Current position in text
        self.tokens = []          # List of tokens
        self.keywords = {'SUM'}   # Supported functions, matched case-sensitively

    # Main tokenization method that processes the entire formula
    def tokenize(self):
        while self.pos < len(self.text):
            char = self.text[self.pos]

            if char.isspace():
                self.pos += 1
            elif char == '=':
                if self.pos != 0:
                    raise self._error("Unexpected '='")
                self.tokens.append(Token('EQUALS', char, self.pos + 1))
                self.pos += 1
            elif char in PUNCTUATION:
                self.tokens.append(Token(PUNCTUATION[char], char, self.pos + 1))
                self.pos += 1
            # Identifiers, function names and cell addresses
            elif char.isalpha():
                self.tokens.append(self._word())
            elif '0' <= char <= '9':
                self.tokens.append(self._number())
            elif char in '+-*/':
                self.tokens.append(Token('OPERATOR', char, self.pos + 1))
                self.pos += 1
            else:
                raise self._error(f"Unexpected character: {char!r}")
        return self.tokens

    def _read_while(self, predicate):
        start = self.pos
        while self.pos < len(self.text) and predicate(self.text[self.pos]):
            self.pos += 1
        return self.text[start:self.pos]

    def _word(self):
        start_col = self.pos + 1
        word = self._read_while(lambda c: c.isalnum() or c == '_')
        if word.isalpha():
            kind = 'FUNCTION' if word in self.keywords else 'IDENTIFIER'
            return Token(kind, word, start_col)
        try:
            validate_cell_ref(word)
        except MalformedAddress as e:
            raise ParseError(str(e), self.text, start_col) from e
        return Token('CELL_ADDRESS', word, start_col)

    def _number(self):
        start_col = self.pos + 1
        digits = self._read_while(lambda c: '0' <= c <= '9')
        return Token('NUMBER', int(digits), start_col)

    def _error(self, message):
        return ParseError(message, self.text, self.pos + 1)
