"""Click-based CLI for the accessibility guard.

Commands:
    check: Evaluate an element snapshot and report violations
    rules: List the rule catalogue

Exit codes for ``check``: 0=clean, 1=warnings only, 2=blocking
violations, 3=unreadable snapshot or configuration.
"""

import sys
from pathlib import Path
from typing import Any

import click

from .. import __version__
from ..config import load_config
from ..errors import A11yGuardError
from ..guard_logging import LogCategory, get_category_logger, setup_logging
from ..models import RuleGroup, RuleId
from ..rules.engine import create_rule_engine
from ..snapshot import load_snapshot

logger = get_category_logger(LogCategory.CLI)

EXIT_CLEAN = 0
EXIT_WARN = 1
EXIT_BLOCK = 2


def _parse_rules(ctx: Any, param: Any, values: tuple[str, ...]) -> list[RuleId]:
    """Click callback turning --rule values into rule ids."""
    rule_ids = []
    for value in values:
        try:
            rule_ids.append(RuleId.parse(value))
        except ValueError as e:
            raise click.BadParameter(str(e)) from e
    return rule_ids


def common_options(f: Any) -> Any:
    """Logging options shared by commands."""
    f = click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")(f)
    f = click.option("--quiet", "-q", is_flag=True, help="Suppress log output")(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Also write logs to this file",
    )(f)
    return f


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Accessibility guard - rule checks for UI element snapshots."""


@cli.command()
@click.argument(
    "snapshot",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--rule",
    "-r",
    "rules",
    multiple=True,
    callback=_parse_rules,
    help="Rule id to run (repeatable), e.g. minimumSize",
)
@click.option(
    "--group",
    "-g",
    "groups",
    multiple=True,
    type=click.Choice([g.value for g in RuleGroup]),
    help="Rule group to run (repeatable)",
)
@click.option(
    "--min-label-length",
    type=click.IntRange(min=0),
    help="Labels must be longer than this (default 2)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--project",
    "-p",
    type=click.Path(file_okay=False, path_type=Path),
    help="Project root holding a11y-guard.config.json",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["cli", "json", "sarif"]),
    default="cli",
    show_default=True,
    help="Output format",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the report to a file instead of stdout",
)
@common_options
def check(
    snapshot,
    rules,
    groups,
    min_label_length,
    config_path,
    project,
    output_format,
    output,
    verbose,
    quiet,
    log_file,
):
    """Evaluate the elements in SNAPSHOT against accessibility rules."""
    if quiet and verbose:
        click.echo("Error: --quiet and --verbose are mutually exclusive", err=True)
        sys.exit(1)

    setup_logging(level="WARNING", quiet=quiet, verbose=verbose, log_file=log_file)

    try:
        config = load_config(project_path=project, config_path=config_path)
        if min_label_length is not None:
            config.options = config.options.model_copy(
                update={"min_label_length": min_label_length}
            )
        elements = load_snapshot(snapshot)
    except A11yGuardError as e:
        logger.debug(f"Aborting check: {e.message}")
        click.echo(e.format(use_color=False), err=True)
        sys.exit(e.exit_code)

    logger.debug(
        f"Loaded {len(elements)} element(s) from {snapshot}",
        extra={"element_count": len(elements)},
    )

    selection = [*rules, *(RuleGroup(g) for g in groups)] or None
    engine = create_rule_engine(config)
    result = engine.run(elements, rule_ids=selection)

    _write_report(result, output_format, output)

    if result.should_block():
        sys.exit(EXIT_BLOCK)
    elif result.warn_count > 0:
        sys.exit(EXIT_WARN)
    sys.exit(EXIT_CLEAN)


def _write_report(result, output_format: str, output: Path | None) -> None:
    """Render the result in the requested format."""
    from ..reporters.sarif import SARIFExporter

    if output_format == "sarif":
        exporter = SARIFExporter()
        if output:
            exporter.export(result, output)
        else:
            click.echo(exporter.export_json(result))
        return

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as stream:
            _report_to(stream, result, output_format)
        click.echo(f"Report written to {output}", err=True)
    else:
        _report_to(sys.stdout, result, output_format)


def _report_to(stream, result, output_format: str) -> None:
    from .reporter import CLIReporter, JSONReporter

    if output_format == "json":
        JSONReporter(stream).report(result)
        stream.write("\n")
    else:
        CLIReporter(stream).report(result)


@cli.command(name="rules")
@click.option(
    "--group",
    "-g",
    type=click.Choice([g.value for g in RuleGroup]),
    help="Only list rules in this group",
)
def list_rules(group):
    """List the rule catalogue."""
    engine = create_rule_engine()
    selected = RuleGroup(group).rule_ids if group else frozenset(RuleId)

    for rule in engine.get_all_rules():
        if rule.rule_id not in selected:
            continue
        click.echo(f"{rule.rule_id.value:<24} {rule.category:<12} {rule.description}")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
