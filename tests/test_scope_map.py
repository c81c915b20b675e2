import pytest

from php_tree_sitter import PHPParser, TokenKind


def parse(source):
    return PHPParser().parse_string(source).stream


def test_switch_scope_points_at_braces():
    stream = parse("<?php\nswitch ($x) {\n    default:\n        break;\n}\n")
    index = stream.indices_of(TokenKind.SWITCH)[0]
    switch = stream[index]

    assert stream[switch.scope_opener].content == "{"
    assert stream[switch.scope_closer].content == "}"
    assert stream[switch.scope_closer].scope_condition == index


def test_clause_opener_is_colon_and_closer_is_break():
    stream = parse("<?php\nswitch ($x) {\n    case 1:\n        foo();\n        break;\n}\n")
    index = stream.indices_of(TokenKind.CASE)[0]
    case = stream[index]

    assert stream[case.scope_opener].kind is TokenKind.COLON
    assert stream[case.scope_closer].content == "break"
    assert stream[case.scope_closer].scope_condition == index


def test_return_and_throw_terminate_clauses():
    source = """<?php
switch ($x) {
    case 1:
        return 1;

    case 2:
        throw new Exception();
}
"""
    stream = parse(source)
    first, second = stream.indices_of(TokenKind.CASE)

    assert stream[stream[first].scope_closer].content == "return"
    assert stream[stream[second].scope_closer].content == "throw"


@pytest.mark.parametrize(
    "statement, keyword",
    [("continue;", "continue"), ("exit;", "exit"), ("die();", "die")],
)
def test_continue_exit_and_die_terminate_clauses(statement, keyword):
    source = f"<?php\nswitch ($x) {{\n    case 1:\n        foo();\n        {statement}\n\n    default:\n        break;\n}}\n"
    stream = parse(source)
    case = stream.indices_of(TokenKind.CASE)[0]
    closer = stream[case].scope_closer

    assert stream[closer].content == keyword
    assert stream[closer].line == 5
    assert stream[closer].scope_condition == case


def test_break_inside_braced_case_body_closes_clause():
    source = """<?php
switch ($x) {
    case 1: {
        foo();
        break;
    }

    case 2:
        break;
}
"""
    stream = parse(source)
    first, second = stream.indices_of(TokenKind.CASE)

    assert stream[stream[first].scope_closer].content == "break"
    assert stream[stream[first].scope_closer].line == 5
    assert stream[stream[first].scope_closer].scope_condition == first
    assert stream[first].scope_closer != stream[second].scope_closer


def test_stacked_cases_share_the_first_claim():
    source = """<?php
switch ($x) {
    case 1:
    case 2:
        foo();
        break;

    default:
        break;
}
"""
    stream = parse(source)
    first, second = stream.indices_of(TokenKind.CASE)
    default = stream.indices_of(TokenKind.DEFAULT)[0]

    assert stream[first].scope_closer == stream[second].scope_closer
    assert stream[stream[first].scope_closer].scope_condition == first
    assert stream[default].scope_closer != stream[first].scope_closer
    assert stream[stream[default].scope_closer].scope_condition == default


def test_last_clause_without_terminator_closes_on_switch_brace():
    source = "<?php\nswitch ($x) {\n    default:\n        foo();\n}\n"
    stream = parse(source)
    switch = stream.indices_of(TokenKind.SWITCH)[0]
    default = stream.indices_of(TokenKind.DEFAULT)[0]

    assert stream[default].scope_closer == stream[switch].scope_closer
    assert stream[stream[default].scope_closer].scope_condition == switch


def test_break_inside_nested_block_does_not_close_clause():
    source = """<?php
switch ($x) {
    case 1:
        if ($y) {
            break;
        }
        foo();
        break;
}
"""
    stream = parse(source)
    case = stream[stream.indices_of(TokenKind.CASE)[0]]
    assert stream[case.scope_closer].line == 8


def test_nested_switch_has_its_own_scope():
    source = """<?php
switch ($x) {
    case 1:
        switch ($y) {
            case 2:
                break;
        }
        break;
}
"""
    stream = parse(source)
    outer, inner = stream.indices_of(TokenKind.SWITCH)
    outer_case, inner_case = stream.indices_of(TokenKind.CASE)

    assert stream[outer].scope_closer > stream[inner].scope_closer
    assert stream[stream[inner_case].scope_closer].line == 6
    assert stream[stream[outer_case].scope_closer].line == 8


def test_unclosed_switch_gets_no_scope():
    stream = parse("<?php\nswitch ($x) {\n    case 1:\n        foo();\n")
    for index in stream.indices_of(TokenKind.SWITCH):
        assert stream[index].scope_closer is None
