from meu_ast import *
from errors import InterpreterError, DuplicateLabelError, UndefinedLabelError, InfiniteLoopError

# Limite fixo de passos (checagens de condição no WHILE, instruções no GOTO).
# É apenas uma rede de segurança, não uma prova de não-terminação.
MAX_STEPS = 1000

class BaseInterpreter:
    """
    Estado e avaliação comuns aos três interpretadores.

    O dicionário de variáveis pertence a uma única chamada de evaluate():
    é zerado no início de cada chamada. Variáveis ausentes valem 0.
    Cada valor inicial informado pelo chamador funciona como uma trava:
    a primeira atribuição do programa a essa variável é ignorada uma vez.
    """
    def __init__(self):
        self.variables = {}
        self.locked = set()
        self.steps = 0

    def evaluate(self, program, inputs=None):
        self._reset(inputs)
        self._execute(program)
        return dict(self.variables)

    def _reset(self, inputs):
        self.variables = {}
        self.locked = set()
        self.steps = 0
        for name, value in (inputs or {}).items():
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Valor inicial inválido para '{name}': {value!r} (esperado inteiro >= 0)")
            self.variables[name] = value
            self.locked.add(name)

    def _execute(self, program):
        raise NotImplementedError

    def _get_variable(self, name):
        return self.variables.get(name, 0)

    def _set_variable(self, name, value):
        if name in self.locked:
            self.locked.discard(name)
            return
        self.variables[name] = value

    def _tick(self):
        self.steps += 1
        if self.steps > MAX_STEPS:
            raise InfiniteLoopError(MAX_STEPS)

    def _evaluate_expr(self, expr):
        if isinstance(expr, Number):
            return expr.value
        elif isinstance(expr, Variable):
            return self._get_variable(expr.name)
        elif isinstance(expr, BinaryOp):
            left_val = self._evaluate_expr(expr.left)
            right_val = self._evaluate_expr(expr.right)

            if expr.op == '+': return left_val + right_val
            if expr.op == '-': return max(0, left_val - right_val)
            raise InterpreterError(f"Operador desconhecido: {expr.op}")
        else:
            raise InterpreterError(f"Tipo de expressão inválido: {type(expr).__name__}")

    def _evaluate_condition(self, condition):
        left_val = self._evaluate_expr(condition.left)
        right_val = self._evaluate_expr(condition.right)
        op = condition.op

        if op == '=': return left_val == right_val
        if op == '!=': return left_val != right_val
        if op == '<': return left_val < right_val
        if op == '>': return left_val > right_val
        if op == '<=': return left_val <= right_val
        if op == '>=': return left_val >= right_val
        raise InterpreterError(f"Operador relacional inválido: {op}")

    def _assign(self, stmt):
        self._set_variable(stmt.var, self._evaluate_expr(stmt.expr))

class LoopInterpreter(BaseInterpreter):

    def _execute(self, program):
        self._execute_block(program.statements)

    def _execute_block(self, statements):
        for stmt in statements:
            if isinstance(stmt, AssignStatement):
                self._assign(stmt)

            elif isinstance(stmt, LoopStatement):
                # O número de repetições é fixado na entrada do laço
                iterations = self._get_variable(stmt.counter)
                for _ in range(iterations):
                    self._execute_block(stmt.body)

            else:
                raise InterpreterError(f"Comando desconhecido em LOOP: {type(stmt).__name__}")

class WhileInterpreter(BaseInterpreter):

    def _execute(self, program):
        self._execute_block(program.statements)

    def _check(self, condition):
        self._tick()
        return self._evaluate_condition(condition)

    def _execute_block(self, statements):
        for stmt in statements:
            if isinstance(stmt, AssignStatement):
                self._assign(stmt)

            elif isinstance(stmt, WhileStatement):
                while self._check(stmt.condition):
                    self._execute_block(stmt.body)

            elif isinstance(stmt, IfStatement):
                if self._evaluate_condition(stmt.condition):
                    self._execute_block(stmt.then_body)
                elif stmt.else_body is not None:
                    self._execute_block(stmt.else_body)

            else:
                raise InterpreterError(f"Comando desconhecido em WHILE: {type(stmt).__name__}")

class GotoInterpreter(BaseInterpreter):
    """
    Executa programas GOTO com um contador de programa explícito.
    Os rótulos são resolvidos em uma passada inicial; um salto para um
    rótulo inexistente só falha quando é efetivamente executado.
    """
    def __init__(self):
        super().__init__()
        self.label_to_index = {}
        self.pc = 0

    def _build_label_table(self, program):
        self.label_to_index = {}
        for index, instr in enumerate(program.instructions):
            if instr.label is None:
                continue
            if instr.label in self.label_to_index:
                raise DuplicateLabelError(instr.label)
            self.label_to_index[instr.label] = index

    def _jump_target(self, label):
        if label not in self.label_to_index:
            raise UndefinedLabelError(label)
        return self.label_to_index[label]

    def _execute(self, program):
        self._build_label_table(program)
        instructions = program.instructions
        self.pc = 0

        while self.pc < len(instructions):
            self._tick()
            stmt = instructions[self.pc].statement

            if isinstance(stmt, AssignStatement):
                self._assign(stmt)
                self.pc += 1

            elif isinstance(stmt, GotoStatement):
                self.pc = self._jump_target(stmt.target)

            elif isinstance(stmt, IfGotoStatement):
                if self._evaluate_condition(stmt.condition):
                    self.pc = self._jump_target(stmt.target)
                else:
                    self.pc += 1

            elif isinstance(stmt, HaltStatement):
                break

            else:
                raise InterpreterError(f"Comando desconhecido na instrução {self.pc + 1}: {type(stmt).__name__}")

INTERPRETERS = {
    'loop': LoopInterpreter,
    'while': WhileInterpreter,
    'goto': GotoInterpreter,
}

def run_program(language, program, inputs=None):
    if language not in INTERPRETERS:
        raise ValueError(f"Linguagem desconhecida: '{language}'")
    return INTERPRETERS[language]().evaluate(program, inputs)
