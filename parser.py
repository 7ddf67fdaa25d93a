from lexer import Lexer, TokenType
from meu_ast import *
from errors import ParseError, SemanticError

class BaseParser:
    """
    Parser descendente recursivo comum às três linguagens: cuida da
    navegação pelos tokens e das gramáticas compartilhadas de expressões,
    condições e atribuições. Cada linguagem acrescenta os seus comandos.
    """
    def __init__(self, tokens):
        self.tokens = tokens
        self.pos = 0
        self.current_token = tokens[0] if tokens else None

    def advance(self):
        token = self.current_token
        self.pos += 1
        if self.pos < len(self.tokens):
            self.current_token = self.tokens[self.pos]
        else:
            self.current_token = None
        return token

    def peek(self, offset=1):
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def at_end(self):
        return self.current_token is None or self.current_token.type == TokenType.EOF

    def check(self, token_type, value=None):
        if self.current_token is None or self.current_token.type != token_type:
            return False
        return value is None or self.current_token.value == value

    def error(self, expected):
        token = self.current_token
        if token is None or token.type == TokenType.EOF:
            found = 'EOF'
        else:
            found = f"{token.type.name}('{token.value}')"
        line = token.line if token else '?'
        column = token.column if token else '?'
        return ParseError(
            f"Linha {line}:{column} - Esperado {expected}, encontrado {found}",
            expected=expected, found=found,
            line=token.line if token else None,
            column=token.column if token else None
        )

    def expect(self, token_type, value=None):
        if not self.check(token_type, value):
            expected = f"'{value}'" if value is not None else token_type.name
            raise self.error(expected)
        return self.advance()

    def parse_operand(self):
        """Parse um operando simples (NUMBER ou VARIABLE)"""
        if self.check(TokenType.NUMBER):
            return Number(int(self.advance().value))
        if self.check(TokenType.IDENTIFIER):
            return Variable(self.advance().value)
        raise self.error('NUMBER ou IDENTIFIER')

    def parse_simple_expression(self):
        """
        Parse uma expressão com no máximo UMA operação:
        - OPERANDO
        - OPERANDO (+|-) OPERANDO
        Encadeamentos como 'a + b + c' não fazem parte da gramática.
        """
        left = self.parse_operand()

        if not self.check(TokenType.OPERATOR):
            return left

        op = self.advance().value
        right = self.parse_operand()

        if self.check(TokenType.OPERATOR):
            token = self.current_token
            raise ParseError(
                f"Linha {token.line}:{token.column} - "
                f"Expressão muito complexa: apenas uma operação é permitida por expressão. "
                f"Use variáveis intermediárias para expressões complexas.",
                expected='fim da expressão', found=f"OPERATOR('{token.value}')",
                line=token.line, column=token.column
            )

        return BinaryOp(left, op, right)

    def parse_condition(self):
        left = self.parse_simple_expression()
        op = self.expect(TokenType.COMPARISON).value
        right = self.parse_simple_expression()
        return Condition(left, op, right)

    def parse_assignment(self):
        var = self.expect(TokenType.IDENTIFIER).value
        self.expect(TokenType.ASSIGN)
        expr = self.parse_simple_expression()
        self.expect(TokenType.SEMICOLON)
        return AssignStatement(var, expr)

    def parse_block(self, *terminators):
        """Lê comandos até encontrar uma das palavras-chave finais (que não é consumida)."""
        statements = []
        while not any(self.check(TokenType.KEYWORD, word) for word in terminators):
            if self.at_end():
                raise self.error(' ou '.join(f"'{word}'" for word in terminators))
            statements.append(self.parse_statement())
        return statements

    def parse_statement(self):
        raise NotImplementedError

class LoopParser(BaseParser):

    def parse_statement(self):
        if self.check(TokenType.KEYWORD, 'LOOP'):
            self.advance()
            counter = self.expect(TokenType.IDENTIFIER).value
            self.expect(TokenType.KEYWORD, 'DO')
            body = self.parse_block('END')
            self.expect(TokenType.KEYWORD, 'END')
            return LoopStatement(counter, body)

        if self.check(TokenType.IDENTIFIER):
            return self.parse_assignment()

        raise self.error("IDENTIFIER ou 'LOOP'")

    def parse_program(self):
        statements = []
        while not self.at_end():
            statements.append(self.parse_statement())
        return LoopProgram(statements)

class WhileParser(BaseParser):

    def parse_statement(self):
        if self.check(TokenType.KEYWORD, 'WHILE'):
            self.advance()
            condition = self.parse_condition()
            self.expect(TokenType.KEYWORD, 'DO')
            body = self.parse_block('END')
            self.expect(TokenType.KEYWORD, 'END')
            return WhileStatement(condition, body)

        if self.check(TokenType.KEYWORD, 'IF'):
            self.advance()
            condition = self.parse_condition()
            self.expect(TokenType.KEYWORD, 'THEN')
            then_body = self.parse_block('ELSE', 'END')
            else_body = None
            if self.check(TokenType.KEYWORD, 'ELSE'):
                self.advance()
                else_body = self.parse_block('END')
            self.expect(TokenType.KEYWORD, 'END')
            return IfStatement(condition, then_body, else_body)

        if self.check(TokenType.IDENTIFIER):
            return self.parse_assignment()

        raise self.error("IDENTIFIER, 'WHILE' ou 'IF'")

    def parse_program(self):
        statements = []
        while not self.at_end():
            statements.append(self.parse_statement())
        return WhileProgram(statements)

class GotoParser(BaseParser):

    def parse_statement(self):
        if self.check(TokenType.IDENTIFIER):
            return self.parse_assignment()

        if self.check(TokenType.KEYWORD, 'GOTO'):
            self.advance()
            target = self.expect(TokenType.IDENTIFIER).value
            self.expect(TokenType.SEMICOLON)
            return GotoStatement(target)

        if self.check(TokenType.KEYWORD, 'IF'):
            self.advance()
            condition = self.parse_condition()
            # Aceita tanto 'IF c GOTO L;' quanto 'IF c THEN GOTO L;'
            if self.check(TokenType.KEYWORD, 'THEN'):
                self.advance()
            self.expect(TokenType.KEYWORD, 'GOTO')
            target = self.expect(TokenType.IDENTIFIER).value
            self.expect(TokenType.SEMICOLON)
            return IfGotoStatement(condition, target)

        if self.check(TokenType.KEYWORD, 'HALT'):
            self.advance()
            self.expect(TokenType.SEMICOLON)
            return HaltStatement()

        raise self.error("IDENTIFIER, 'GOTO', 'IF' ou 'HALT'")

    def parse_instruction(self):
        label = None
        next_token = self.peek()
        if self.check(TokenType.IDENTIFIER) and next_token and next_token.type == TokenType.COLON:
            label = self.advance().value
            self.advance()
        return Instruction(self.parse_statement(), label)

    def parse_program(self):
        instructions = []
        while not self.at_end():
            instructions.append(self.parse_instruction())
        return GotoProgram(instructions)

PARSERS = {
    'loop': LoopParser,
    'while': WhileParser,
    'goto': GotoParser,
}

def parse_source(language, source):
    """Executa lexer + parser da linguagem indicada ('loop', 'while' ou 'goto')."""
    if language not in PARSERS:
        raise ValueError(f"Linguagem desconhecida: '{language}'")
    tokens = Lexer(source).tokenize()
    return PARSERS[language](tokens).parse_program()

class SemanticAnalyzer:
    """
    Verificação estática opcional de programas GOTO: rótulos duplicados
    e saltos para rótulos inexistentes. O interpretador continua
    detectando esses erros apenas no momento do salto.
    """
    def __init__(self, program):
        self.program = program
        self.errors = []
        self.labels = {}

    def analyze(self):
        for index, instr in enumerate(self.program.instructions, start=1):
            if instr.label is None:
                continue
            if instr.label in self.labels:
                self.errors.append(
                    f"Instrução {index}: Rótulo '{instr.label}' já definido na instrução {self.labels[instr.label]}"
                )
            else:
                self.labels[instr.label] = index

        for index, instr in enumerate(self.program.instructions, start=1):
            stmt = instr.statement
            if isinstance(stmt, (GotoStatement, IfGotoStatement)):
                self._check_goto_target(stmt.target, index)

        if self.errors:
            raise SemanticError("\n".join(self.errors))

    def _check_goto_target(self, target, current_index):
        if target not in self.labels:
            self.errors.append(
                f"Instrução {current_index}: Destino de goto '{target}' não existe"
            )
