import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

# --- Expressões e condições (comuns às três linguagens) ---

@dataclass(frozen=True)
class Number:
    value: int

@dataclass(frozen=True)
class Variable:
    name: str

@dataclass(frozen=True)
class BinaryOp:
    left: 'Expression'
    op: str
    right: 'Expression'

Expression = Union[Number, Variable, BinaryOp]

@dataclass(frozen=True)
class Condition:
    left: Expression
    op: str
    right: Expression

COMPARISON_OPERATORS = ('=', '!=', '<', '>', '<=', '>=')
ARITHMETIC_OPERATORS = ('+', '-')

# --- Comandos ---

@dataclass(frozen=True)
class AssignStatement:
    var: str
    expr: Expression

@dataclass(frozen=True)
class LoopStatement:
    counter: str
    body: List['Statement'] = field(default_factory=list)

@dataclass(frozen=True)
class WhileStatement:
    condition: Condition
    body: List['Statement'] = field(default_factory=list)

@dataclass(frozen=True)
class IfStatement:
    condition: Condition
    then_body: List['Statement'] = field(default_factory=list)
    else_body: Optional[List['Statement']] = None

@dataclass(frozen=True)
class GotoStatement:
    target: str

@dataclass(frozen=True)
class IfGotoStatement:
    condition: Condition
    target: str

@dataclass(frozen=True)
class HaltStatement:
    pass

Statement = Union[AssignStatement, LoopStatement, WhileStatement, IfStatement,
                  GotoStatement, IfGotoStatement, HaltStatement]

@dataclass(frozen=True)
class Instruction:
    statement: Statement
    label: Optional[str] = None

# --- Programas ---

@dataclass(frozen=True)
class LoopProgram:
    statements: List[Statement] = field(default_factory=list)

@dataclass(frozen=True)
class WhileProgram:
    statements: List[Statement] = field(default_factory=list)

@dataclass(frozen=True)
class GotoProgram:
    instructions: List[Instruction] = field(default_factory=list)

Program = Union[LoopProgram, WhileProgram, GotoProgram]

_INDEXED_NAME = re.compile(r'x(\d+)')

def collect_variables(node, names=None):
    """
    Percorre a AST recursivamente e devolve o conjunto de nomes de
    variáveis lidos ou escritos pelo programa. Rótulos não entram.
    """
    if names is None:
        names = set()

    if isinstance(node, (LoopProgram, WhileProgram)):
        for stmt in node.statements:
            collect_variables(stmt, names)

    elif isinstance(node, GotoProgram):
        for instr in node.instructions:
            collect_variables(instr.statement, names)

    elif isinstance(node, AssignStatement):
        names.add(node.var)
        collect_variables(node.expr, names)

    elif isinstance(node, LoopStatement):
        names.add(node.counter)
        for stmt in node.body:
            collect_variables(stmt, names)

    elif isinstance(node, WhileStatement):
        collect_variables(node.condition, names)
        for stmt in node.body:
            collect_variables(stmt, names)

    elif isinstance(node, IfStatement):
        collect_variables(node.condition, names)
        for stmt in node.then_body + (node.else_body or []):
            collect_variables(stmt, names)

    elif isinstance(node, IfGotoStatement):
        collect_variables(node.condition, names)

    elif isinstance(node, (Condition, BinaryOp)):
        collect_variables(node.left, names)
        collect_variables(node.right, names)

    elif isinstance(node, Variable):
        names.add(node.name)

    return names

def highest_variable_index(program, extra_names=()):
    """Maior índice N entre as variáveis no formato xN (do programa e de extra_names), ou -1 se não houver nenhuma."""
    highest = -1
    for name in collect_variables(program) | set(extra_names):
        match = _INDEXED_NAME.fullmatch(name)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest
