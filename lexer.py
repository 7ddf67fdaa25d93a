from dataclasses import dataclass
from enum import Enum, auto

from errors import LexicalError

KEYWORDS = frozenset({
    'LOOP', 'DO', 'END',
    'WHILE', 'IF', 'THEN', 'ELSE',
    'GOTO', 'HALT',
})

class TokenType(Enum):
    KEYWORD = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    OPERATOR = auto()
    COMPARISON = auto()
    ASSIGN = auto()
    SEMICOLON = auto()
    COLON = auto()
    EOF = auto()

@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    line: int
    column: int

def _is_letter(char):
    return char.isascii() and char.isalpha()

def _is_digit(char):
    return char.isascii() and char.isdigit()

class Lexer:
    """
    Converte o texto-fonte em uma sequência de tokens, em uma única
    varredura da esquerda para a direita com um caractere de lookahead.
    O mesmo lexer atende às três linguagens (LOOP, WHILE e GOTO).
    """
    def __init__(self, source):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char = self.source[0] if source else None

    def peek(self, offset=1):
        index = self.pos + offset
        if index < len(self.source):
            return self.source[index]
        return None

    def advance(self):
        if self.current_char == '\n':
            self.line += 1
            self.column = 0
        self.pos += 1
        self.column += 1
        if self.pos < len(self.source):
            self.current_char = self.source[self.pos]
        else:
            self.current_char = None

    def skip_whitespace(self):
        while self.current_char is not None and self.current_char.isspace():
            self.advance()

    def number(self):
        start_pos = self.pos
        while self.current_char is not None and _is_digit(self.current_char):
            self.advance()
        return self.source[start_pos:self.pos]

    def identifier(self):
        start_pos = self.pos
        while self.current_char is not None and (_is_letter(self.current_char) or _is_digit(self.current_char)):
            self.advance()
        return self.source[start_pos:self.pos]

    def tokenize(self):
        tokens = []

        while self.current_char is not None:
            if self.current_char.isspace():
                self.skip_whitespace()
                continue

            start_line = self.line
            start_column = self.column
            char = self.current_char

            if _is_letter(char):
                word = self.identifier()
                token_type = TokenType.KEYWORD if word in KEYWORDS else TokenType.IDENTIFIER
                tokens.append(Token(token_type, word, start_line, start_column))
                continue

            if _is_digit(char):
                tokens.append(Token(TokenType.NUMBER, self.number(), start_line, start_column))
                continue

            # Operadores de dois caracteres têm prioridade sobre o prefixo de um caractere
            pair = char + (self.peek() or '')
            if pair == ':=':
                self.advance()
                self.advance()
                tokens.append(Token(TokenType.ASSIGN, pair, start_line, start_column))
                continue

            if pair in ('!=', '<=', '>='):
                self.advance()
                self.advance()
                tokens.append(Token(TokenType.COMPARISON, pair, start_line, start_column))
                continue

            if char in '=<>':
                self.advance()
                tokens.append(Token(TokenType.COMPARISON, char, start_line, start_column))
                continue

            if char in '+-':
                self.advance()
                tokens.append(Token(TokenType.OPERATOR, char, start_line, start_column))
                continue

            if char == ':':
                self.advance()
                tokens.append(Token(TokenType.COLON, char, start_line, start_column))
                continue

            if char == ';':
                self.advance()
                tokens.append(Token(TokenType.SEMICOLON, char, start_line, start_column))
                continue

            raise LexicalError(
                f"Linha {self.line}:{self.column} - "
                f"Caractere inválido: '{char}' (posição {self.pos})",
                char=char, position=self.pos, line=self.line, column=self.column
            )

        tokens.append(Token(TokenType.EOF, '', self.line, self.column))
        return tokens
