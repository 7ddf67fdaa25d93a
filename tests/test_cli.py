import pytest

from cli import main, parse_binding

MULTIPLICATION = "x0 := 3; x1 := 4; x2 := 0; LOOP x0 DO LOOP x1 DO x2 := x2 + 1; END END"

@pytest.fixture
def source_file(tmp_path):
    def write(text, name="programa.txt"):
        path = tmp_path / name
        path.write_text(text)
        return str(path)
    return write

def test_run_prints_sorted_variables(source_file, capsys):
    assert main(["loop", source_file(MULTIPLICATION), "x0=2"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["x0 = 2", "x1 = 4", "x2 = 8"]

def test_translate_and_show(source_file, capsys):
    assert main(["loop", source_file(MULTIPLICATION), "--translate-to", "while", "--show"]) == 0
    out = capsys.readouterr().out
    assert "# WHILE" in out
    assert "WHILE x3 != 0 DO" in out
    assert "x2 = 12" in out

def test_translate_to_same_language_is_a_no_op(source_file, capsys):
    assert main(["goto", source_file("x0 := 1; HALT;"), "--translate-to", "goto"]) == 0
    assert capsys.readouterr().out == "x0 = 1\n"

def test_unsupported_translation(source_file, capsys):
    assert main(["goto", source_file("HALT;"), "--translate-to", "loop"]) == 1
    assert "goto -> loop" in capsys.readouterr().err

def test_lexical_error_exit_code(source_file, capsys):
    assert main(["while", source_file("x0 := 1 #")]) == 1
    assert "Caractere inválido" in capsys.readouterr().err

def test_missing_file(tmp_path, capsys):
    assert main(["loop", str(tmp_path / "nao_existe.txt")]) == 1
    assert "não pôde ser aberto" in capsys.readouterr().err

def test_check_reports_undefined_label(source_file, capsys):
    assert main(["goto", source_file("x0 := 1; IF x0 = 0 GOTO M4; HALT;"), "--check"]) == 1
    assert "não existe" in capsys.readouterr().err

def test_without_check_undefined_label_is_lazy(source_file, capsys):
    assert main(["goto", source_file("x0 := 1; IF x0 = 0 GOTO M4; HALT;")]) == 0

def test_infinite_loop_exit_code(source_file, capsys):
    assert main(["while", source_file("x0 := 1; WHILE x0 = 1 DO END")]) == 1

def test_invalid_binding_exits():
    with pytest.raises(SystemExit):
        main(["loop", "programa.txt", "x0=abc"])

@pytest.mark.parametrize("text, expected", [("x0=5", ("x0", 5)), ("total=0", ("total", 0))])
def test_parse_binding(text, expected):
    assert parse_binding(text) == expected

def test_dashed_bindings(source_file, capsys):
    assert main(["loop", source_file(MULTIPLICATION), "-x0=2", "-x1=5"]) == 0
    assert "x2 = 10" in capsys.readouterr().out

def test_invalid_dashed_binding_exits(source_file):
    with pytest.raises(SystemExit):
        main(["loop", source_file(MULTIPLICATION), "-x0=abc"])

def test_translation_keeps_bindings_on_fresh_names(source_file, capsys):
    path = source_file("LOOP x0 DO x1 := x1 + 1; END")
    assert main(["loop", path, "x0=3", "x2=5", "--translate-to", "goto"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "x1 = 3" in out
    assert "x2 = 5" in out

@pytest.mark.parametrize("text, expected", [("-x0=5", ("x0", 5)), ("-total=12", ("total", 12))])
def test_parse_dashed_binding(text, expected):
    assert parse_binding(text) == expected
