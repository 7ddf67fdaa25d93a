from dataclasses import is_dataclass
from typing import Dict, Literal

from fastapi import FastAPI
from pydantic import BaseModel, NonNegativeInt

from lexer import Lexer
from parser import PARSERS, SemanticAnalyzer
from interpreter import run_program
from translator import TRANSLATIONS, translate
from formatter import format_program
from meu_ast import collect_variables
from errors import SemanticError, InterpreterError, TranslationError

app = FastAPI(title="LOOP/WHILE/GOTO IDE", version="1.0.0")

Language = Literal['loop', 'while', 'goto']

# Erros do núcleo reportados ao cliente
TOOLCHAIN_ERRORS = (SyntaxError, SemanticError, InterpreterError, TranslationError, ValueError)

# --- Modelos de Dados ---
class CodeRequest(BaseModel):
    language: Language
    code: str

class RunRequest(CodeRequest):
    inputs: Dict[str, NonNegativeInt] = {}

class TranslateRequest(BaseModel):
    source: Language
    target: Language
    code: str
    inputs: Dict[str, NonNegativeInt] = {}
    run: bool = False

# --- Lógica Auxiliar ---

def parse_code(language, code):
    tokens = Lexer(code).tokenize()
    return tokens, PARSERS[language](tokens).parse_program()

def ast_to_dict(node):
    """Serializa qualquer nó da AST em um dicionário JSON."""
    if not is_dataclass(node):
        return {"type": "Unknown", "value": str(node)}
    result = {"type": type(node).__name__}
    for key, value in node.__dict__.items():
        if value is None: continue
        if isinstance(value, (int, str, bool)): result[key] = value
        elif isinstance(value, list): result[key] = [ast_to_dict(v) for v in value]
        else: result[key] = ast_to_dict(value)
    return result

def failure(error):
    return {"success": False, "errors": str(error).split("\n")}

# --- Endpoints da API ---
@app.post("/api/run")
async def run_code(request: RunRequest):
    try:
        _, program = parse_code(request.language, request.code)
        variables = run_program(request.language, program, request.inputs)
        return {"success": True, "variables": variables}
    except TOOLCHAIN_ERRORS as e:
        return failure(e)

@app.post("/api/translate")
async def translate_code(request: TranslateRequest):
    if (request.source, request.target) not in TRANSLATIONS:
        return failure(f"Tradução não suportada: {request.source} -> {request.target}")
    try:
        _, program = parse_code(request.source, request.code)
        translated = translate(request.source, request.target, program, set(request.inputs))
        response = {
            "success": True,
            "code": format_program(translated),
            "ast": ast_to_dict(translated),
        }
        if request.run:
            source_vars = run_program(request.source, program, request.inputs)
            target_vars = run_program(request.target, translated, request.inputs)
            vocabulary = collect_variables(program) | set(request.inputs)
            response["source_variables"] = source_vars
            response["target_variables"] = target_vars
            response["equivalent"] = all(
                source_vars.get(name, 0) == target_vars.get(name, 0) for name in vocabulary
            )
        return response
    except TOOLCHAIN_ERRORS as e:
        return failure(e)

@app.post("/api/compile")
async def compile_code(request: CodeRequest):
    try:
        tokens, program = parse_code(request.language, request.code)
        if request.language == 'goto':
            SemanticAnalyzer(program).analyze()
        token_list = [{"type": t.type.name, "value": t.value, "line": t.line, "column": t.column} for t in tokens]
        return {"success": True, "tokens": token_list, "ast": ast_to_dict(program)}
    except TOOLCHAIN_ERRORS as e:
        return failure(e)

@app.get("/api/examples")
async def get_examples():
    return {
        "multiplication": {
            "name": "Multiplicação (LOOP)", "language": "loop",
            "code": "x0 := 3;\nx1 := 4;\nx2 := 0;\nLOOP x0 DO\n    LOOP x1 DO\n        x2 := x2 + 1;\n    END\nEND\n"
        },
        "division": {
            "name": "Divisão inteira (WHILE)", "language": "while",
            "code": "x0 := 10;\nx1 := 3;\nx2 := 0;\nWHILE x0 >= x1 DO\n    x0 := x0 - x1;\n    x2 := x2 + 1;\nEND\n"
        },
        "maximum": {
            "name": "Maior de dois (WHILE)", "language": "while",
            "code": "IF x0 > x1 THEN\n    x2 := x0;\nELSE\n    x2 := x1;\nEND\n"
        },
        "countdown": {
            "name": "Contagem regressiva (GOTO)", "language": "goto",
            "code": "x0 := 5;\nM1: IF x0 = 0 THEN GOTO M2;\n    x0 := x0 - 1;\n    GOTO M1;\nM2: HALT;\n"
        },
    }
