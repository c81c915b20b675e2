import logging
from pathlib import Path
from typing import Optional

import typer
from php_linter.engine import LinterEngine
from php_linter.registry import registry
from php_tree_sitter.parser import PHPParser

from .config import LintConfig
from .converters import internal_issue_to_lint_issue
from .models import SEVERITY_RANK, LintReport, Severity

app = typer.Typer(help="PHP switch statement linter")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _collect_files(paths: list[Path]) -> list[Path]:
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.rglob("*.php")))
        else:
            files.append(path)
    return files


def _parse_severity(value: str) -> Severity:
    try:
        return Severity(value.upper())
    except ValueError:
        choices = ", ".join(s.value.lower() for s in Severity)
        raise typer.BadParameter(f"'{value}' is not one of {choices}", param_hint="--severity")


@app.command()
def lint(
    files: list[Path] = typer.Argument(..., help="Files or directories to lint"),
    config_file: Path = typer.Option(Path(".php-lint.toml"), "--config", help="Path to config file"),
    severity: Optional[str] = typer.Option(None, help="Minimum severity to show"),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
    tab_width: Optional[int] = typer.Option(None, min=1, help="Columns per tab stop"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Run linter on PHP files"""
    _configure_logging(verbose)
    if output_format not in ("text", "json"):
        raise typer.BadParameter(f"'{output_format}' is not text or json", param_hint="--format")

    config = LintConfig.discover(config_file)
    min_severity = _parse_severity(severity or config.severity)
    engine = LinterEngine(
        tab_width=tab_width or config.tab_width,
        ignore_codes=config.ignore,
        registry=registry,
    )
    enabled_rules = config.apply_to_registry(registry)

    report = LintReport()
    for file_path in _collect_files(files):
        try:
            issues = engine.analyze_file(file_path, rules=enabled_rules)
        except (OSError, UnicodeDecodeError) as e:
            report.failed_files.append(str(file_path))
            typer.echo(f"Error reading {file_path}: {e}", err=True)
            continue
        report.files_checked += 1
        report.issues.extend(
            issue
            for issue in map(internal_issue_to_lint_issue, issues)
            if SEVERITY_RANK[issue.severity] >= SEVERITY_RANK[min_severity]
        )

    if output_format == "json":
        typer.echo(report.model_dump_json(indent=2))
    else:
        for issue in report.issues:
            typer.echo(
                f"{issue.severity.value}: {issue.file_path}:{issue.line_number}:{issue.column} "
                f"[{issue.rule_id}] - {issue.message}"
            )
        typer.echo(f"\nTotal issues found: {len(report.issues)} in {report.files_checked} file(s)")

    if report.error_count > 0 or report.failed_files:
        raise typer.Exit(code=1)


@app.command()
def rules():
    """List the available rules and their violation codes"""
    for rule in registry.get_all_rules():
        typer.echo(f"{rule.rule_id} ({rule.name}): {rule.description}")
        for code in rule.codes:
            typer.echo(f"  {rule.rule_id}.{code}")


@app.command()
def tokens(
    file_path: Path = typer.Argument(..., help="PHP file to tokenize"),
    tab_width: int = typer.Option(4, min=1, help="Columns per tab stop"),
):
    """Dump the token stream of a file with its scope metadata"""
    result = PHPParser(tab_width=tab_width).parse_file(file_path)
    for index, token in enumerate(result.stream):
        scope = ""
        if token.scope_condition is not None:
            scope = (
                f" opener={token.scope_opener} closer={token.scope_closer}"
                f" condition={token.scope_condition}"
            )
        typer.echo(
            f"{index:5d} {token.line}:{token.column} {token.kind.name:<11} {token.content!r}{scope}"
        )
    for error in result.errors:
        typer.echo(f"syntax error at {error}", err=True)


if __name__ == "__main__":
    app()
