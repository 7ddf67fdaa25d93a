"""Executa programas LOOP, WHILE ou GOTO a partir de arquivos-fonte."""

import argparse
import sys
from pathlib import Path

from termcolor import colored

from parser import parse_source, SemanticAnalyzer
from interpreter import run_program
from translator import TRANSLATIONS, translate
from formatter import format_program
from errors import SemanticError, InterpreterError, TranslationError

LANGUAGES = ('loop', 'while', 'goto')

def parse_binding(text):
    """Converte 'x0=5' (ou '-x0=5') em ('x0', 5)."""
    name, sep, value = text.removeprefix('-').partition('=')
    if not sep or not name or not value.isdigit():
        raise argparse.ArgumentTypeError(f"valor inicial inválido: '{text}' (use NOME=NUMERO)")
    return name, int(value)

def build_argparser():
    argparser = argparse.ArgumentParser(
        prog="lwg", description="Interpretador e tradutor de programas LOOP/WHILE/GOTO"
    )
    argparser.add_argument("language", choices=LANGUAGES, help="Linguagem do arquivo de entrada")
    argparser.add_argument("file", type=Path, help="Arquivo-fonte")
    argparser.add_argument(
        "bindings", nargs="*", type=parse_binding, metavar="NOME=VALOR",
        help="Valores iniciais travados (ex.: x0=5 ou -x0=5)"
    )
    argparser.add_argument(
        "--translate-to", choices=LANGUAGES, dest="target",
        help="Traduz o programa antes de executá-lo"
    )
    argparser.add_argument("--show", action="store_true", help="Mostra o programa executado")
    argparser.add_argument(
        "--check", action="store_true",
        help="Valida os rótulos de programas GOTO antes de executar"
    )
    return argparser

def error(message):
    print(colored("error: ", "red", attrs=["bold"]) + message, file=sys.stderr)

def run_file(args):
    source = args.file.read_text()
    inputs = dict(args.bindings)
    program = parse_source(args.language, source)
    language = args.language

    if args.check and language == 'goto':
        SemanticAnalyzer(program).analyze()

    if args.target and args.target != language:
        program = translate(language, args.target, program, set(inputs))
        language = args.target

    if args.show:
        print(colored(f"# {language.upper()}", attrs=["bold"]))
        print(format_program(program))

    return run_program(language, program, inputs)

def main(argv=None):
    argparser = build_argparser()
    args, extras = argparser.parse_known_args(argv)

    # Valores no formato -x0=5 chegam como opções desconhecidas
    try:
        args.bindings += [parse_binding(arg) for arg in extras]
    except argparse.ArgumentTypeError as e:
        argparser.error(str(e))

    if args.target and args.target != args.language and (args.language, args.target) not in TRANSLATIONS:
        error(f"tradução não suportada: {args.language} -> {args.target}")
        return 1

    try:
        variables = run_file(args)
    except OSError as e:
        error(f"'{args.file}' não pôde ser aberto: {e.strerror}")
        return 1
    except (SyntaxError, SemanticError, InterpreterError, TranslationError, ValueError) as e:
        error(str(e))
        return 1

    for name in sorted(variables):
        print(f"{name} = {variables[name]}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
