"""Lexer for Belalang.

The lexer is a pull-based token stream: each call to :meth:`Lexer.next_token`
matches one token at the current position using a combined regular expression
of named groups. Each match yields a :class:`Token` containing its type,
value and source line number.

Tokens cover literals (integers, floats, strings), identifiers, keywords
(``fn``, ``while``, ``if`` ...), operators and delimiters. Whitespace and
comments beginning with ``#`` are skipped. Numeric tokens keep their lexeme
text; the parser converts them. String escapes are resolved here.

The stream never raises. Problems are reported as ``ILLEGAL``,
``UNCLOSED_STRING`` and ``BAD_ESCAPE`` tokens for the parser to turn into
syntax errors, and once the input is exhausted every call returns ``EOF``.


File: lexer.py
Version: 0.1.0
License: MIT
"""

import re


KEYWORDS = {
    'fn': 'FN',
    'while': 'WHILE',
    'if': 'IF',
    'else': 'ELSE',
    'return': 'RETURN',
    'true': 'TRUE',
    'false': 'FALSE',
    'let': 'LET',
}

ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
    '\\': '\\',
    '"': '"',
}

# Order matters: longer operators must come before their prefixes.
TOKEN_SPECIFICATION = [
    # Literals
    ('FLOAT',         r'\d+\.\d+'),
    ('INT',           r'\d+'),
    ('IDENT',         r'[A-Za-z_][A-Za-z0-9_]*'),

    # Assignment
    ('COLON_ASSIGN',  r':='),
    ('LSHIFT_ASSIGN', r'<<='),
    ('RSHIFT_ASSIGN', r'>>='),
    ('ADD_ASSIGN',    r'\+='),
    ('SUB_ASSIGN',    r'-='),
    ('MUL_ASSIGN',    r'\*='),
    ('DIV_ASSIGN',    r'/='),
    ('MOD_ASSIGN',    r'%='),
    ('AMP_ASSIGN',    r'&='),
    ('PIPE_ASSIGN',   r'\|='),
    ('CARET_ASSIGN',  r'\^='),

    # Logical operators
    ('AND',           r'&&'),
    ('OR',            r'\|\|'),

    # Bitwise operators
    ('LSHIFT',        r'<<'),
    ('RSHIFT',        r'>>'),
    ('AMP',           r'&'),
    ('PIPE',          r'\|'),
    ('CARET',         r'\^'),

    # Comparison operators
    ('EQ',            r'=='),
    ('NE',            r'!='),
    ('GE',            r'>='),
    ('LE',            r'<='),
    ('GT',            r'>'),
    ('LT',            r'<'),

    ('ASSIGN',        r'='),
    ('NOT',           r'!'),

    # Arithmetic operators
    ('PLUS',          r'\+'),
    ('MINUS',         r'-'),
    ('MUL',           r'\*'),
    ('DIV',           r'/'),
    ('MOD',           r'%'),

    # Delimiters
    ('LPAREN',        r'\('),
    ('RPAREN',        r'\)'),
    ('LBRACE',        r'\{'),
    ('RBRACE',        r'\}'),
    ('LBRACKET',      r'\['),
    ('RBRACKET',      r'\]'),
    ('COMMA',         r','),
    ('SEMICOLON',     r';'),

    ('MISMATCH',      r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION)
)
SKIP_REGEX = re.compile(r'(?:[ \t\r\n]+|#[^\n]*)+')

# Fixed spelling of every tag that carries no payload.
LITERALS = {
    name: re.sub(r'\\(.)', r'\1', pattern)
    for name, pattern in TOKEN_SPECIFICATION
    if name not in ('FLOAT', 'INT', 'IDENT', 'MISMATCH')
}
LITERALS.update({tag: word for word, tag in KEYWORDS.items()})
LITERALS['EOF'] = 'EOF'


class Token:
    """
    Represents a lexical token with a type and value.

    Tokens compare by ``(type, value)``; the line number is positional
    metadata only.
    """
    __slots__ = ('type', 'value', 'line')

    def __init__(self, type_, value=None, line=None):
        """
        Initialize a new token.

        Parameters:
            type_ (str): The token type.
            value (str | None): The lexeme for payload-carrying tokens.
            line (int | None): Source line the token starts on.
        """
        object.__setattr__(self, 'type', type_)
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'line', line)

    def __setattr__(self, name, value):
        raise AttributeError("Token is immutable")

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __hash__(self):
        return hash((self.type, self.value))

    @property
    def literal(self) -> str:
        """
        The token's source spelling.
        """
        if self.value is not None:
            return self.value
        return LITERALS.get(self.type, self.type)

    def __repr__(self) -> str:
        """
        Return a string representation of the token.
        """
        return f"Token({self.type}, {self.value!r}, line={self.line})"


class Lexer:
    """
    Pull-based scanner over a source string.
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0
        self.line = 1

    def _skip(self) -> None:
        match_obj = SKIP_REGEX.match(self.source, self.position)
        if match_obj:
            self.line += match_obj.group().count('\n')
            self.position = match_obj.end()

    def next_token(self) -> Token:
        """
        Return the next token, or ``EOF`` once the input is exhausted.
        """
        self._skip()
        if self.position >= len(self.source):
            return Token('EOF', None, self.line)

        if self.source[self.position] == '"':
            return self._read_string()

        match_obj = TOKEN_REGEX.match(self.source, self.position)
        kind = match_obj.lastgroup
        value = match_obj.group()
        self.position = match_obj.end()

        if kind == 'IDENT':
            keyword = KEYWORDS.get(value)
            if keyword is not None:
                return Token(keyword, None, self.line)
            return Token('IDENT', value, self.line)
        if kind in ('INT', 'FLOAT'):
            return Token(kind, value, self.line)
        if kind == 'MISMATCH':
            return Token('ILLEGAL', value, self.line)
        return Token(kind, None, self.line)

    def _read_string(self) -> Token:
        """
        Read a double-quoted string, resolving escape sequences.
        """
        start_line = self.line
        source = self.source
        pos = self.position + 1
        chars = []
        while pos < len(source):
            ch = source[pos]
            if ch == '"':
                self.position = pos + 1
                return Token('STRING', ''.join(chars), start_line)
            if ch == '\\':
                if pos + 1 >= len(source):
                    break
                escape = source[pos + 1]
                if escape not in ESCAPES:
                    # Resume after the bad escape so the rest still lexes.
                    self._resume_after_string(pos + 2)
                    return Token('BAD_ESCAPE', escape, start_line)
                chars.append(ESCAPES[escape])
                pos += 2
                continue
            if ch == '\n':
                self.line += 1
            chars.append(ch)
            pos += 1
        self.position = len(source)
        return Token('UNCLOSED_STRING', ''.join(chars), start_line)

    def _resume_after_string(self, pos: int) -> None:
        source = self.source
        while pos < len(source):
            ch = source[pos]
            if ch == '"':
                self.position = pos + 1
                return
            if ch == '\\':
                pos += 2
                continue
            if ch == '\n':
                self.line += 1
            pos += 1
        self.position = len(source)

    def __iter__(self):
        """
        Yield tokens up to and including the first ``EOF``.
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == 'EOF':
                return


def tokenize(code: str) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.

    Returns:
        list[Token]: The tokens, ending with a single ``EOF``.
    """
    return list(Lexer(code))
