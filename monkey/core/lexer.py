"""Lexical analysis for the Monkey language. The Lexer walks a source string once, left to right, and hands out one
Token per call to next_token. Once the input is exhausted it keeps returning EOF tokens, so the parser can peek past
the end without bounds checks.

Lexical rules, loosely:

```
<ident>   ::= (letter | "_")+               ; ASCII only, reserved words become keywords
<int>     ::= digit+                        ; no floats, no negative literals (unary minus is an operator)
<string>  ::= '"' <char>* '"'               ; no escapes, unterminated strings run to end of input
<op>      ::= "=" | "==" | "!" | "!=" | "+" | "-" | "*" | "/" | "<" | ">"
<delim>   ::= "," | ";" | ":" | "(" | ")" | "{" | "}" | "[" | "]"
```
"""

from string import ascii_letters, digits

from monkey.core.token import Token, TokenKind, lookup_ident


class Lexer:
    """Converts a source string into a lazy sequence of Tokens."""
    WHITESPACE = " \t\n\r"
    LETTERS = ascii_letters + "_"
    DIGITS = digits
    EOF_CHAR = ""  # sentinel returned when reading past the end of input

    SINGLE_CHARS = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.ASTERISK,
        "/": TokenKind.SLASH,
        "<": TokenKind.LT,
        ">": TokenKind.GT,
        ",": TokenKind.COMMA,
        ";": TokenKind.SEMICOLON,
        ":": TokenKind.COLON,
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
    }

    def __init__(self, source):
        self.source = source
        self.position = 0       # index of self.char
        self.read_position = 0  # index of the character after self.char
        self.char = Lexer.EOF_CHAR

        self._read_char()

    def _read_char(self):
        """Advances the cursor by one character."""
        self.char = self._peek_char()
        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self):
        if self.read_position >= len(self.source):
            return Lexer.EOF_CHAR
        return self.source[self.read_position]

    def _skip_whitespace(self):
        while self.char and self.char in Lexer.WHITESPACE:
            self._read_char()

    def _read_while(self, chars):
        """Consumes characters in chars and returns them. Leaves the cursor on the first character not in chars."""
        start = self.position
        while self.char and self.char in chars:
            self._read_char()
        return self.source[start:self.position]

    def _read_string(self):
        """Reads the body of a string literal. Cursor starts on the opening quote and ends on the closing one (or at
        end of input if the string is unterminated).
        """
        start = self.position + 1
        self._read_char()
        while self.char and self.char != '"':
            self._read_char()
        return self.source[start:self.position]

    def _two_char(self, second, matched, unmatched):
        """Resolves a one- or two-character operator using one character of lookahead."""
        if self._peek_char() == second:
            first = self.char
            self._read_char()
            return Token(matched, first + second)
        return Token(unmatched, self.char)

    def next_token(self):
        """Returns the next Token and advances the cursor past it."""
        self._skip_whitespace()

        char = self.char
        if char == Lexer.EOF_CHAR:
            return Token(TokenKind.EOF, "")

        if char in Lexer.LETTERS:
            ident = self._read_while(Lexer.LETTERS)
            return Token(lookup_ident(ident), ident)  # cursor is already past the identifier

        if char in Lexer.DIGITS:
            return Token(TokenKind.INT, self._read_while(Lexer.DIGITS))

        if char == "=":
            token = self._two_char("=", TokenKind.EQ, TokenKind.ASSIGN)
        elif char == "!":
            token = self._two_char("=", TokenKind.NOT_EQ, TokenKind.BANG)
        elif char == '"':
            token = Token(TokenKind.STRING, self._read_string())
        elif char in Lexer.SINGLE_CHARS:
            token = Token(Lexer.SINGLE_CHARS[char], char)
        else:
            token = Token(TokenKind.ILLEGAL, char)

        self._read_char()
        return token

    def __iter__(self):
        """Yields Tokens until (but not including) the first EOF."""
        token = self.next_token()
        while token.kind is not TokenKind.EOF:
            yield token
            token = self.next_token()
