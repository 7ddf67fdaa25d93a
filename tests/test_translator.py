import pytest

from parser import parse_source
from interpreter import run_program
from translator import (
    NEGATED_COMPARISON, negate, translate, loop_to_while, while_to_goto,
    goto_to_while, loop_to_goto, WhileToGotoTranslator,
)
from meu_ast import *
from errors import TranslationError

LOOP_PROGRAMS = [
    ("x0 := 3; x1 := 4; x2 := 0; LOOP x0 DO LOOP x1 DO x2 := x2 + 1; END END", {}),
    ("x0 := 3; x1 := 4; x2 := 0; LOOP x0 DO LOOP x1 DO x2 := x2 + 1; END END", {"x0": 2, "x1": 5}),
    ("x0 := 5; x1 := 0; LOOP x0 DO x1 := x1 + 1; x0 := 0; END", {}),
    ("x2 := x0; LOOP x1 DO x2 := x2 + 1; END", {"x0": 4, "x1": 3}),
    ("x1 := x0 - 1;", {"x0": 0}),
    ("x0 := 2; LOOP x0 DO LOOP x0 DO x1 := x1 + 1; END x0 := x0 + 1; END", {}),
    ("LOOP y DO total := total + y; END", {"y": 3}),
]

WHILE_PROGRAMS = [
    ("x0 := 10; x1 := 3; x2 := 0; WHILE x0 >= x1 DO x0 := x0 - x1; x2 := x2 + 1; END", {}),
    ("IF x0 > x1 THEN x2 := x0; ELSE x2 := x1; END", {"x0": 3, "x1": 8}),
    ("IF x0 > x1 THEN x2 := x0; ELSE x2 := x1; END", {"x0": 9, "x1": 2}),
    ("x1 := 0; WHILE x0 != 0 DO IF x0 > 2 THEN x1 := x1 + 2; END x0 := x0 - 1; END", {"x0": 5}),
    ("IF x0 = 0 THEN x1 := 1; ELSE END", {}),
    ("IF x0 = 0 THEN x1 := 1; ELSE END", {"x0": 1}),
    ("x1 := 0; WHILE x1 < x0 DO x1 := x1 + 1; END", {"x0": 4}),
    ("x2 := 0; x3 := x0; WHILE x3 > 0 DO x4 := x1; WHILE x4 >= 1 DO x2 := x2 + 1; x4 := x4 - 1; END x3 := x3 - 1; END",
     {"x0": 3, "x1": 4}),
    ("x0 := 2; IF x0 = 0 THEN x1 := 1; ELSE WHILE x0 != 0 DO x0 := x0 - 1; x1 := x1 + 3; END END", {}),
    ("x1 := 5; WHILE x1 <= 7 DO x1 := x1 + 1; END", {}),
]

GOTO_PROGRAMS = [
    ("x0 := 5; M1: IF x0 = 0 THEN GOTO M2; x0 := x0 - 1; GOTO M1; M2: HALT;", {}),
    ("x0 := 3; x1 := 0; M1: IF x0 = 0 THEN GOTO M2; x1 := x1 + 1; x0 := x0 - 1; GOTO M1; M2: HALT;", {}),
    ("x0 := 1; GOTO M1; x0 := 2; M1: HALT;", {}),
    ("x0 := 1; HALT; x0 := 2;", {}),
    ("x0 := 4; IF x0 > 2 GOTO M1; x1 := 1; M1: x2 := x0 + 1;", {}),
    ("GOTO M3; M1: x1 := x1 + 1; GOTO M4; M3: x0 := 7; GOTO M1; M4: x2 := x0 - x1;", {}),
    ("x2 := 0; M1: IF x0 = 0 GOTO M3; x3 := x1; M2: IF x3 = 0 GOTO M4; x2 := x2 + 1; x3 := x3 - 1; GOTO M2; "
     "M4: x0 := x0 - 1; GOTO M1; M3: HALT;", {"x0": 3, "x1": 4}),
]

def assert_equivalent(program, source_lang, translated, target_lang, inputs):
    expected = run_program(source_lang, program, inputs)
    actual = run_program(target_lang, translated, inputs)
    for name in collect_variables(program) | set(inputs):
        assert actual.get(name, 0) == expected.get(name, 0), name

# --- LOOP -> WHILE ---

def test_loop_to_while_structure():
    program = parse_source("loop", "LOOP x0 DO x1 := x1 + 1; END")
    assert loop_to_while(program) == WhileProgram([
        AssignStatement("x2", Variable("x0")),
        WhileStatement(Condition(Variable("x2"), "!=", Number(0)), [
            AssignStatement("x1", BinaryOp(Variable("x1"), "+", Number(1))),
            AssignStatement("x2", BinaryOp(Variable("x2"), "-", Number(1))),
        ]),
    ])

def test_loop_to_while_multiplication():
    program = parse_source("loop", LOOP_PROGRAMS[0][0])
    assert run_program("while", loop_to_while(program))["x2"] == 12

def test_loop_to_while_fresh_names_above_highest_index():
    program = parse_source("loop", "x7 := 2; LOOP x7 DO y := y + 1; LOOP y DO x3 := 1; END END")
    translated = loop_to_while(program)
    assert collect_variables(translated) - collect_variables(program) == {"x8", "x9"}

def test_loop_to_while_without_indexed_names_starts_at_x0():
    program = parse_source("loop", "LOOP n DO m := m + 1; END")
    assert loop_to_while(program).statements[0] == AssignStatement("x0", Variable("n"))

@pytest.mark.parametrize("src, inputs", LOOP_PROGRAMS)
def test_loop_to_while_equivalence(src, inputs):
    program = parse_source("loop", src)
    assert_equivalent(program, "loop", loop_to_while(program), "while", inputs)

@pytest.mark.parametrize("src, inputs", LOOP_PROGRAMS)
def test_loop_to_goto_equivalence(src, inputs):
    program = parse_source("loop", src)
    assert_equivalent(program, "loop", loop_to_goto(program), "goto", inputs)

def test_translation_does_not_mutate_source():
    program = parse_source("loop", LOOP_PROGRAMS[0][0])
    snapshot = parse_source("loop", LOOP_PROGRAMS[0][0])
    loop_to_while(program)
    assert program == snapshot

# --- WHILE -> GOTO ---

@pytest.mark.parametrize("op", sorted(NEGATED_COMPARISON))
def test_negation_table_is_an_involution(op):
    condition = Condition(Variable("x0"), op, Number(1))
    assert negate(condition).op != op
    assert negate(negate(condition)) == condition

@pytest.mark.parametrize("op, a, b", [
    (op, a, b) for op in NEGATED_COMPARISON for a in range(3) for b in range(3)
])
def test_negation_flips_truth_value(op, a, b):
    src = f"IF x0 {op} x1 THEN x2 := 1; END"
    program = parse_source("while", src)
    negated = negate(program.statements[0].condition)
    flipped = WhileProgram([IfStatement(negated, [AssignStatement("x2", Number(1))])])
    inputs = {"x0": a, "x1": b}
    original = run_program("while", program, inputs).get("x2", 0)
    assert run_program("while", flipped, inputs).get("x2", 0) == 1 - original

def test_while_to_goto_structure():
    program = parse_source("while", "WHILE x0 != 0 DO x0 := x0 - 1; END")
    assert while_to_goto(program) == GotoProgram([
        Instruction(IfGotoStatement(Condition(Variable("x0"), "=", Number(0)), "M1"), "M0"),
        Instruction(AssignStatement("x0", BinaryOp(Variable("x0"), "-", Number(1)))),
        Instruction(GotoStatement("M0")),
        Instruction(AssignStatement("x1", Number(0)), "M1"),
        Instruction(HaltStatement()),
    ])

def test_while_to_goto_if_else_structure():
    program = parse_source("while", "IF x0 < 2 THEN x1 := 1; ELSE x1 := 2; END")
    assert while_to_goto(program).instructions == [
        Instruction(IfGotoStatement(Condition(Variable("x0"), ">=", Number(2)), "M0")),
        Instruction(AssignStatement("x1", Number(1))),
        Instruction(GotoStatement("M1")),
        Instruction(AssignStatement("x1", Number(2)), "M0"),
        Instruction(AssignStatement("x2", Number(0)), "M1"),
        Instruction(HaltStatement()),
    ]

def test_while_to_goto_ends_with_halt():
    assert while_to_goto(WhileProgram([])).instructions == [Instruction(HaltStatement())]

def test_while_to_goto_labels_are_unique():
    program = parse_source("while", WHILE_PROGRAMS[8][0])
    labels = [i.label for i in while_to_goto(program).instructions if i.label]
    assert len(labels) == len(set(labels))

@pytest.mark.parametrize("src, inputs", WHILE_PROGRAMS)
def test_while_to_goto_equivalence(src, inputs):
    program = parse_source("while", src)
    assert_equivalent(program, "while", while_to_goto(program), "goto", inputs)

@pytest.mark.parametrize("src, inputs", WHILE_PROGRAMS)
def test_while_goto_while_round_trip_equivalence(src, inputs):
    program = parse_source("while", src)
    assert_equivalent(program, "while", goto_to_while(while_to_goto(program)), "while", inputs)

@pytest.mark.parametrize("src, inputs", WHILE_PROGRAMS)
def test_extra_noops_do_not_change_results(src, inputs):
    program = parse_source("while", src)
    translator = WhileToGotoTranslator(program)
    translated = translator.translate()
    dummy = translator.dummy or "x99"
    noop = Instruction(AssignStatement(dummy, Number(0)))
    padded = GotoProgram([noop] + translated.instructions[:-1] + [noop, translated.instructions[-1]])
    assert_equivalent(program, "while", padded, "goto", inputs)

# --- GOTO -> WHILE ---

def test_goto_to_while_structure():
    program = parse_source("goto", "x0 := 1; HALT;")
    assert goto_to_while(program) == WhileProgram([
        AssignStatement("x1", Number(1)),
        WhileStatement(Condition(Variable("x1"), "!=", Number(0)), [
            IfStatement(Condition(Variable("x1"), "=", Number(1)), [
                AssignStatement("x0", Number(1)),
                AssignStatement("x1", Number(2)),
            ]),
            IfStatement(Condition(Variable("x1"), "=", Number(2)), [
                AssignStatement("x1", Number(0)),
            ]),
        ]),
    ])

def test_goto_to_while_conditional_jump_effect():
    program = parse_source("goto", "M1: IF x0 = 0 GOTO M1; x0 := 1;")
    dispatch = goto_to_while(program).statements[1].body
    assert dispatch[0].then_body == [IfStatement(
        Condition(Variable("x0"), "=", Number(0)),
        [AssignStatement("x1", Number(1))],
        [AssignStatement("x1", Number(2))],
    )]
    # a última instrução zera o contador de programa
    assert dispatch[1].then_body[-1] == AssignStatement("x1", Number(0))

def test_goto_to_while_countdown():
    program = parse_source("goto", GOTO_PROGRAMS[0][0])
    assert run_program("while", goto_to_while(program))["x0"] == 0

def test_goto_to_while_unknown_label():
    program = parse_source("goto", "x0 := 1; GOTO M7;")
    with pytest.raises(TranslationError) as exc:
        goto_to_while(program)
    assert exc.value.label == "M7"

def test_goto_to_while_duplicate_label():
    program = parse_source("goto", "M1: HALT; M1: HALT;")
    with pytest.raises(TranslationError):
        goto_to_while(program)

def test_goto_to_while_empty_program():
    assert goto_to_while(GotoProgram([])) == WhileProgram([])

@pytest.mark.parametrize("src, inputs", GOTO_PROGRAMS)
def test_goto_to_while_equivalence(src, inputs):
    program = parse_source("goto", src)
    assert_equivalent(program, "goto", goto_to_while(program), "while", inputs)

# --- Despacho ---

def test_translate_dispatch():
    program = parse_source("loop", "x0 := 1;")
    assert translate("loop", "while", program) == WhileProgram([AssignStatement("x0", Number(1))])
    with pytest.raises(TranslationError):
        translate("while", "loop", program)

@pytest.mark.parametrize("source, target, src", [
    ("loop", "while", "LOOP x0 DO x1 := x1 + 1; END"),
    ("while", "goto", "WHILE x0 != 0 DO x0 := x0 - 1; END"),
    ("goto", "while", "x0 := 1; HALT;"),
])
def test_reserved_names_are_never_reused(source, target, src):
    program = parse_source(source, src)
    translated = translate(source, target, program, {"x4", "total"})
    fresh = collect_variables(translated) - collect_variables(program)
    assert fresh == {"x5"}

@pytest.mark.parametrize("src, inputs", [
    ("LOOP x0 DO x1 := x1 + 1; END", {"x0": 3, "x2": 5}),
    ("x2 := 0; LOOP x0 DO LOOP x1 DO x2 := x2 + 1; END END", {"x0": 2, "x1": 3, "x3": 7, "x4": 1}),
])
def test_loop_to_goto_with_inputs_on_fresh_names(src, inputs):
    program = parse_source("loop", src)
    assert_equivalent(program, "loop", loop_to_goto(program, set(inputs)), "goto", inputs)
