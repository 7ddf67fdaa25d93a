from meu_ast import *

class ProgramFormatter:
    """
    Converte uma AST (LOOP, WHILE ou GOTO) de volta para texto-fonte
    aceito pelo parser correspondente. Usado para exibir programas traduzidos.
    """
    def __init__(self, indent="    "):
        self.indent = indent

    def format(self, program):
        if isinstance(program, (LoopProgram, WhileProgram)):
            lines = self._format_block(program.statements, 0)
        elif isinstance(program, GotoProgram):
            lines = self._format_instructions(program.instructions)
        else:
            raise TypeError(f"Tipo de programa inválido: {type(program).__name__}")
        return "\n".join(lines) + "\n" if lines else ""

    def format_expr(self, expr):
        if isinstance(expr, Number):
            return str(expr.value)
        elif isinstance(expr, Variable):
            return expr.name
        elif isinstance(expr, BinaryOp):
            return f"{self.format_expr(expr.left)} {expr.op} {self.format_expr(expr.right)}"
        raise TypeError(f"Tipo de expressão inválido: {type(expr).__name__}")

    def format_condition(self, condition):
        return f"{self.format_expr(condition.left)} {condition.op} {self.format_expr(condition.right)}"

    def format_statement(self, stmt):
        """Formata um comando de uma linha (atribuição ou comandos GOTO)."""
        if isinstance(stmt, AssignStatement):
            return f"{stmt.var} := {self.format_expr(stmt.expr)};"
        elif isinstance(stmt, GotoStatement):
            return f"GOTO {stmt.target};"
        elif isinstance(stmt, IfGotoStatement):
            return f"IF {self.format_condition(stmt.condition)} THEN GOTO {stmt.target};"
        elif isinstance(stmt, HaltStatement):
            return "HALT;"
        raise TypeError(f"Comando inválido: {type(stmt).__name__}")

    def _format_block(self, statements, depth):
        pad = self.indent * depth
        lines = []
        for stmt in statements:
            if isinstance(stmt, LoopStatement):
                lines.append(f"{pad}LOOP {stmt.counter} DO")
                lines.extend(self._format_block(stmt.body, depth + 1))
                lines.append(f"{pad}END")
            elif isinstance(stmt, WhileStatement):
                lines.append(f"{pad}WHILE {self.format_condition(stmt.condition)} DO")
                lines.extend(self._format_block(stmt.body, depth + 1))
                lines.append(f"{pad}END")
            elif isinstance(stmt, IfStatement):
                lines.append(f"{pad}IF {self.format_condition(stmt.condition)} THEN")
                lines.extend(self._format_block(stmt.then_body, depth + 1))
                if stmt.else_body is not None:
                    lines.append(f"{pad}ELSE")
                    lines.extend(self._format_block(stmt.else_body, depth + 1))
                lines.append(f"{pad}END")
            else:
                lines.append(pad + self.format_statement(stmt))
        return lines

    def _format_instructions(self, instructions):
        # Alinha os comandos pela largura do maior rótulo
        width = max((len(instr.label) + 2 for instr in instructions if instr.label), default=0)
        lines = []
        for instr in instructions:
            prefix = f"{instr.label}: " if instr.label else ""
            lines.append(prefix.ljust(width) + self.format_statement(instr.statement))
        return lines

def format_program(program, indent="    "):
    return ProgramFormatter(indent).format(program)
