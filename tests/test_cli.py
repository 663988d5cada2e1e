# tests/test_cli.py
import json

from ebnfkit.ebnfc import main


def test_check_ok(write_file, arith_src, capsys):
    path = write_file("arith.ebnf", arith_src)
    assert main(["check", path]) == 0
    assert "[CHECK OK] rules=3 start=expression" in capsys.readouterr().out


def test_check_reports_warnings(write_file, capsys):
    path = write_file("w.ebnf", 'a ::= "x"\nnonsense\na ::= y@z\n')
    assert main(["check", path]) == 0
    err = capsys.readouterr().err
    assert "[WARN] line 2 skipped" in err
    assert "redefined" in err
    assert "y@z" in err


def test_check_strict_rejects_unrecognized_syntax(write_file, capsys):
    path = write_file("s.ebnf", "a ::= y@z\n")
    assert main(["check", path, "--strict"]) == 2
    assert "[GRAMMAR ERROR]" in capsys.readouterr().err


def test_check_without_rules(write_file, capsys):
    path = write_file("empty.ebnf", "(* nothing here *)\n")
    assert main(["check", path]) == 2
    err = capsys.readouterr().err
    assert "[GRAMMAR ERROR]" in err
    assert "No valid grammar rules found" in err


def test_check_missing_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "missing.ebnf")]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_rules_listing(write_file, arith_src, capsys):
    path = write_file("arith.ebnf", arith_src)
    assert main(["rules", path]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == '* expression ::= term ( ( "+" | "-" ) term )*'
    assert lines[1].startswith("  term ")
    assert lines[1].endswith("::= digit+")
    assert len(lines) == 3


def test_parse_text(write_file, arith_src, capsys):
    path = write_file("arith.ebnf", arith_src)
    assert main(["parse", path, "--text", "3+4"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "expression '3+4' [0-3]"
    assert "  terminal '+' [1-2]" in out


def test_parse_json_with_rule(write_file, arith_src, capsys):
    path = write_file("arith.ebnf", arith_src)
    assert main(["parse", path, "--text", "42", "--rule", "term", "--json"]) == 0
    tree = json.loads(capsys.readouterr().out)
    assert (tree["type"], tree["end"]) == ("term", 2)
    assert len(tree["children"]) == 2


def test_parse_input_file(write_file, arith_src, capsys):
    path = write_file("arith.ebnf", arith_src)
    inp = write_file("expr.txt", "10-2")
    assert main(["parse", path, "--input", inp]) == 0
    assert capsys.readouterr().out.startswith("expression '10-2' [0-4]")


def test_parse_failure_exit_code(write_file, arith_src, capsys):
    path = write_file("arith.ebnf", arith_src)
    assert main(["parse", path, "--text", "3+4)"]) == 1
    err = capsys.readouterr().err
    assert "[PARSE ERROR] IncompleteParse" in err
    assert 'Remaining: ")" at position 3' in err


def test_parse_unknown_rule(write_file, arith_src, capsys):
    path = write_file("arith.ebnf", arith_src)
    assert main(["parse", path, "--text", "1", "--rule", "factor"]) == 1
    assert "Unknown rule: factor" in capsys.readouterr().err


def test_parse_recursion_ceiling(write_file, capsys):
    path = write_file("left.ebnf", 'e ::= e "+" "1" | "1"\n')
    assert main(["parse", path, "--text", "1+1", "--max-depth", "30"]) == 1
    assert "RecursionLimitExceeded" in capsys.readouterr().err


def test_parse_debug_output(write_file, arith_src, capsys):
    path = write_file("arith.ebnf", arith_src)
    assert main(["parse", path, "--text", "1", "-D"]) == 0
    err = capsys.readouterr().err
    assert "[DEBUG] grammar compiled | rules=3 start=expression" in err
    assert "[DEBUG] parsed | rule=expression" in err
