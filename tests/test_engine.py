import pytest
from php_linter.engine import FileReporter, LinterEngine
from php_linter.models import Severity
from php_linter.registry import RuleRegistry
from php_linter.rules.switch_rules import SwitchDeclarationRule
from php_tree_sitter import PHPParser

BAD_SWITCH = """<?php
switch ($x) {
  Case 1:
        foo();
        break;
    case 2:
        break;
}
"""


def test_engine_reports_full_rule_ids():
    issues = LinterEngine().analyze_string(BAD_SWITCH, "bad.php")

    assert [i.rule_id for i in issues] == [
        "ControlStructures.SwitchDeclaration.caseIndent",
        "ControlStructures.SwitchDeclaration.caseNotLower",
        "ControlStructures.SwitchDeclaration.SpaceBetweenCase",
    ]
    assert all(i.severity is Severity.ERROR for i in issues)
    assert str(issues[0].file_path) == "bad.php"


def test_issue_positions_and_messages():
    issues = LinterEngine().analyze_string(BAD_SWITCH)

    not_lower = next(i for i in issues if i.rule_id.endswith("caseNotLower"))
    assert (not_lower.line, not_lower.column) == (3, 3)
    assert not_lower.message == 'CASE keyword must be lowercase; expected "case" but found "Case"'
    assert not_lower.context == "Case"


def test_issues_sorted_by_position():
    issues = LinterEngine().analyze_string(BAD_SWITCH)
    positions = [(i.line, i.column) for i in issues]
    assert positions == sorted(positions)


@pytest.mark.parametrize(
    "ignored",
    ["caseNotLower", "ControlStructures.SwitchDeclaration.caseNotLower"],
)
def test_ignore_codes(ignored):
    issues = LinterEngine(ignore_codes=[ignored]).analyze_string(BAD_SWITCH)
    assert not any(i.rule_id.endswith("caseNotLower") for i in issues)
    assert len(issues) == 2


def test_explicit_rule_list():
    issues = LinterEngine().analyze_string(BAD_SWITCH, rules=[])
    assert issues == []


def test_every_switch_is_dispatched():
    source = """<?php
switch ($a) {
case 1:
    break;
}
switch ($b) {
case 2:
    break;
}
"""
    issues = LinterEngine().analyze_string(source)
    indents = [i for i in issues if i.rule_id.endswith("caseIndent")]
    assert [i.line for i in indents] == [3, 7]


def test_analyze_file(tmp_path):
    file_path = tmp_path / "test.php"
    file_path.write_text(BAD_SWITCH, encoding="utf-8")

    issues = LinterEngine().analyze_file(file_path)
    assert len(issues) == 3
    assert issues[0].file_path == file_path


def test_analyze_missing_file(tmp_path):
    with pytest.raises(OSError):
        LinterEngine().analyze_file(tmp_path / "missing.php")


def test_file_reporter_builds_issues():
    stream = PHPParser().parse_string(BAD_SWITCH).stream
    rule = SwitchDeclarationRule()
    reporter = FileReporter("bad.php", stream, rule)

    reporter.report_violation("Expected %s; %s found", 3, "Example", ("1", "0"))

    assert reporter.issues[0].message == "Expected 1; 0 found"
    assert reporter.issues[0].rule_id == "ControlStructures.SwitchDeclaration.Example"


def test_registry_selection():
    registry = RuleRegistry()

    assert [r.name for r in registry.get_all_rules()] == ["switch-declaration"]
    assert registry.get_enabled_rules(select=["ControlStructures"]) == registry.get_all_rules()
    assert registry.get_enabled_rules(select=["Squiz"]) == []
    assert registry.get_enabled_rules(ignore=["ControlStructures.SwitchDeclaration"]) == []
    # Ignoring a single code keeps the rule itself enabled.
    assert len(registry.get_enabled_rules(ignore=["caseIndent"])) == 1
