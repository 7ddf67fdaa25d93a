from meu_ast import *
from errors import TranslationError

LABEL_PREFIX = 'M'

# Tabela de negação, exaustiva sobre os seis operadores relacionais
NEGATED_COMPARISON = {
    '=': '!=',
    '!=': '=',
    '<': '>=',
    '>=': '<',
    '>': '<=',
    '<=': '>',
}

def negate(condition):
    if condition.op not in NEGATED_COMPARISON:
        raise TranslationError(f"Operador relacional não suportado: {condition.op}")
    return Condition(condition.left, NEGATED_COMPARISON[condition.op], condition.right)

def translate_expr(expr):
    """Copia uma expressão nó a nó, sem simplificações."""
    if isinstance(expr, Number):
        return Number(expr.value)
    elif isinstance(expr, Variable):
        return Variable(expr.name)
    elif isinstance(expr, BinaryOp):
        return BinaryOp(translate_expr(expr.left), expr.op, translate_expr(expr.right))
    raise TranslationError(f"Tipo de expressão inválido: {type(expr).__name__}")

def translate_condition(condition):
    return Condition(translate_expr(condition.left), condition.op, translate_expr(condition.right))

class FreshNames:
    """
    Gera variáveis e rótulos novos para uma única tradução.

    As variáveis novas ficam estritamente acima do maior índice xN usado
    pelo programa de origem ou pelos nomes reservados (por exemplo, os
    valores iniciais do chamador); os rótulos usam um contador próprio (M0, M1, ...).
    """
    def __init__(self, program, reserved=()):
        self.next_variable = highest_variable_index(program, reserved) + 1
        self.next_label = 0

    def variable(self):
        name = f"x{self.next_variable}"
        self.next_variable += 1
        return name

    def label(self):
        name = f"{LABEL_PREFIX}{self.next_label}"
        self.next_label += 1
        return name

class LoopToWhileTranslator:
    """
    LOOP -> WHILE. Cada 'LOOP v DO corpo END' vira:

        t := v;
        WHILE t != 0 DO corpo'; t := t - 1; END

    O contador t é uma variável nova, então alterar v dentro do corpo
    não muda o número de repetições.
    """
    def __init__(self, program, reserved=()):
        self.program = program
        self.reserved = reserved
        self.fresh = None

    def translate(self):
        self.fresh = FreshNames(self.program, self.reserved)
        return WhileProgram(self._translate_block(self.program.statements))

    def _translate_block(self, statements):
        result = []
        for stmt in statements:
            if isinstance(stmt, AssignStatement):
                result.append(AssignStatement(stmt.var, translate_expr(stmt.expr)))

            elif isinstance(stmt, LoopStatement):
                counter = self.fresh.variable()
                result.append(AssignStatement(counter, Variable(stmt.counter)))
                body = self._translate_block(stmt.body)
                body.append(AssignStatement(counter, BinaryOp(Variable(counter), '-', Number(1))))
                result.append(WhileStatement(Condition(Variable(counter), '!=', Number(0)), body))

            else:
                raise TranslationError(f"Comando inválido em LOOP: {type(stmt).__name__}")
        return result

class WhileToGotoTranslator:
    """
    WHILE -> GOTO. Lineariza o controle estruturado em uma lista de
    instruções rotuladas e termina o programa com HALT.

    Como toda instrução GOTO precisa de um comando, os rótulos de saída
    ficam presos a uma atribuição neutra (xD := 0) sobre uma variável nova.
    """
    def __init__(self, program, reserved=()):
        self.program = program
        self.reserved = reserved
        self.fresh = None
        self.dummy = None

    def translate(self):
        self.fresh = FreshNames(self.program, self.reserved)
        self.dummy = None
        instructions = self._translate_block(self.program.statements)
        instructions.append(Instruction(HaltStatement()))
        return GotoProgram(instructions)

    def _noop(self, label):
        if self.dummy is None:
            self.dummy = self.fresh.variable()
        return Instruction(AssignStatement(self.dummy, Number(0)), label)

    def _attach_label(self, label, instructions):
        if instructions and instructions[0].label is None:
            first = instructions[0]
            return [Instruction(first.statement, label)] + instructions[1:]
        return [self._noop(label)] + instructions

    def _translate_block(self, statements):
        result = []
        for stmt in statements:
            if isinstance(stmt, AssignStatement):
                result.append(Instruction(AssignStatement(stmt.var, translate_expr(stmt.expr))))

            elif isinstance(stmt, WhileStatement):
                start = self.fresh.label()
                end = self.fresh.label()
                condition = negate(translate_condition(stmt.condition))
                result.append(Instruction(IfGotoStatement(condition, end), start))
                result.extend(self._translate_block(stmt.body))
                result.append(Instruction(GotoStatement(start)))
                result.append(self._noop(end))

            elif isinstance(stmt, IfStatement):
                else_label = self.fresh.label()
                end = self.fresh.label()
                condition = negate(translate_condition(stmt.condition))
                result.append(Instruction(IfGotoStatement(condition, else_label)))
                result.extend(self._translate_block(stmt.then_body))
                result.append(Instruction(GotoStatement(end)))
                else_part = self._translate_block(stmt.else_body or [])
                result.extend(self._attach_label(else_label, else_part))
                result.append(self._noop(end))

            else:
                raise TranslationError(f"Comando inválido em WHILE: {type(stmt).__name__}")
        return result

class GotoToWhileTranslator:
    """
    GOTO -> WHILE pela simulação do contador de programa:

        pc := 1;
        WHILE pc != 0 DO
            IF pc = 1 THEN <efeito da instrução 1> END
            ...
            IF pc = n THEN <efeito da instrução n> END
        END

    As instruções são numeradas a partir de 1; pc = 0 encerra o laço.
    """
    def __init__(self, program, reserved=()):
        self.program = program
        self.reserved = reserved
        self.fresh = None
        self.pc = None
        self.label_to_position = {}

    def translate(self):
        self.fresh = FreshNames(self.program, self.reserved)
        self.label_to_position = self._resolve_labels()
        instructions = self.program.instructions

        # Sem instruções não há o que simular; o laço nunca terminaria
        if not instructions:
            return WhileProgram([])

        self.pc = self.fresh.variable()
        dispatch = [
            IfStatement(
                Condition(Variable(self.pc), '=', Number(position)),
                self._effect(position, instr.statement)
            )
            for position, instr in enumerate(instructions, start=1)
        ]
        return WhileProgram([
            AssignStatement(self.pc, Number(1)),
            WhileStatement(Condition(Variable(self.pc), '!=', Number(0)), dispatch),
        ])

    def _resolve_labels(self):
        positions = {}
        for position, instr in enumerate(self.program.instructions, start=1):
            if instr.label is None:
                continue
            if instr.label in positions:
                raise TranslationError(f"Rótulo duplicado: '{instr.label}'", label=instr.label)
            positions[instr.label] = position
        return positions

    def _target(self, label):
        if label not in self.label_to_position:
            raise TranslationError(f"Rótulo desconhecido: '{label}'", label=label)
        return self.label_to_position[label]

    def _next(self, position):
        return position + 1 if position < len(self.program.instructions) else 0

    def _set_pc(self, value):
        return AssignStatement(self.pc, Number(value))

    def _effect(self, position, stmt):
        if isinstance(stmt, AssignStatement):
            return [
                AssignStatement(stmt.var, translate_expr(stmt.expr)),
                self._set_pc(self._next(position)),
            ]
        elif isinstance(stmt, GotoStatement):
            return [self._set_pc(self._target(stmt.target))]
        elif isinstance(stmt, IfGotoStatement):
            return [IfStatement(
                translate_condition(stmt.condition),
                [self._set_pc(self._target(stmt.target))],
                [self._set_pc(self._next(position))]
            )]
        elif isinstance(stmt, HaltStatement):
            return [self._set_pc(0)]
        raise TranslationError(f"Comando inválido em GOTO: {type(stmt).__name__}")

def loop_to_while(program, reserved=()):
    return LoopToWhileTranslator(program, reserved).translate()

def while_to_goto(program, reserved=()):
    return WhileToGotoTranslator(program, reserved).translate()

def goto_to_while(program, reserved=()):
    return GotoToWhileTranslator(program, reserved).translate()

def loop_to_goto(program, reserved=()):
    """Tradução derivada: LOOP -> WHILE -> GOTO."""
    return while_to_goto(loop_to_while(program, reserved), reserved)

TRANSLATIONS = {
    ('loop', 'while'): loop_to_while,
    ('while', 'goto'): while_to_goto,
    ('goto', 'while'): goto_to_while,
    ('loop', 'goto'): loop_to_goto,
}

def translate(source, target, program, reserved=()):
    if (source, target) not in TRANSLATIONS:
        raise TranslationError(f"Tradução não suportada: {source} -> {target}")
    return TRANSLATIONS[(source, target)](program, reserved)
