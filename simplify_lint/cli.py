"""Command-line interface for simplify_lint."""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from simplify_lint import __version__
from simplify_lint.capabilities import CAPABILITIES
from simplify_lint.core.config import Config
from simplify_lint.core.errors import ConfigError, FormError
from simplify_lint.core.finding import Diagnostic, Finding
from simplify_lint.core.forms import from_data, iter_calls, render
from simplify_lint.core.report import Emitter, Reporter
from simplify_lint.engine import Engine
from simplify_lint.hooks import CompilerHooks, install
from simplify_lint.rules import list_rules

logger = logging.getLogger(__name__)


class LocatedEmitter(Emitter):
    """Emitter whose sink attaches the position currently being compiled."""

    def __init__(self):
        super().__init__(self._record)
        self.findings: List[Finding] = []
        self.source = ""
        self.line = 0
        self.context: Optional[str] = None
        self.errors = 0
        self._rule: Optional[str] = None

    def emit(self, diagnostic: Diagnostic) -> None:
        self._rule = diagnostic.rule
        super().emit(diagnostic)

    def _record(self, message: str) -> None:
        self.findings.append(
            Finding(self.source, self.line, message, rule=self._rule, context=self.context)
        )


@click.command()
@click.version_option(version=__version__)
@click.argument("files", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to config file (.simplify_lint.toml)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "sarif"]),
    default=None,
    help="Output format",
)
@click.option(
    "--emacs",
    help="Emacs executable used to probe capabilities",
)
@click.option(
    "--disable-rule",
    multiple=True,
    help="Disable specific rule (can be used multiple times)",
)
@click.option(
    "--list-rules",
    "list_rules_flag",
    is_flag=True,
    help="List all available rules and exit",
)
@click.option(
    "--probe",
    "probe_flag",
    is_flag=True,
    help="Probe host capabilities, print them and exit",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose logging",
)
def main(
    files: tuple,
    config: Optional[str],
    output_format: Optional[str],
    emacs: Optional[str],
    disable_rule: tuple,
    list_rules_flag: bool,
    probe_flag: bool,
    verbose: bool,
):
    """
    simplify-lint - Simplification warnings for Emacs Lisp calls.

    Reads call forms in JSON-lines form, one top-level form per line, as
    dumped by a compiler integration. Lists are calls, strings are symbols,
    {"str": "..."} objects are string literals.

    Examples:

        # Check a dump of forms
        simplify-lint forms.jsonl

        # Show which optional-argument behaviors the installed Emacs has
        simplify-lint --probe

        # Output as JSON
        simplify-lint --format=json forms.jsonl > report.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if list_rules_flag:
        _print_rules()
        sys.exit(0)

    try:
        cfg = Config.from_file(Path(config) if config else None)
    except ConfigError as e:
        raise click.ClickException(str(e))

    # Override config with CLI options
    if output_format:
        cfg.output_format = output_format
    if emacs:
        cfg.emacs = emacs
    if disable_rule:
        cfg.disabled_rules.update(disable_rule)

    emitter = LocatedEmitter()
    engine = Engine.create(cfg, emitter=emitter)

    if probe_flag:
        _print_capabilities(engine)
        sys.exit(0)

    if not files:
        raise click.UsageError("No input files given")

    hooks = CompilerHooks()
    installation = install(engine, hooks)
    try:
        for file_path in files:
            _compile_file(Path(file_path), hooks, emitter)
    finally:
        installation.uninstall()

    reporter = Reporter(output_format=cfg.output_format)
    exit_code = reporter.report(emitter.findings)
    if emitter.errors:
        raise click.ClickException(
            f"{emitter.errors} input error{'s' if emitter.errors != 1 else ''} skipped"
        )
    sys.exit(exit_code)


def _compile_file(path: Path, hooks: CompilerHooks, emitter: LocatedEmitter) -> None:
    """Feed every call site of every form in a file through the hooks.

    Unreadable files and undecodable lines are reported, counted on the
    emitter, and skipped.
    """
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error reading {path}: {e}", err=True)
        emitter.errors += 1
        return

    emitter.source = str(path)
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith(";"):
            continue

        try:
            form = from_data(json.loads(line))
        except (json.JSONDecodeError, FormError) as e:
            click.echo(f"Error: {path}:{lineno}: {e}", err=True)
            emitter.errors += 1
            continue

        emitter.line = lineno
        emitter.context = render(form)
        for call_form in iter_calls(form):
            hooks.compile_call(call_form)

    logger.debug("Compiled %d lines from %s", len(lines), path)


def _print_rules():
    """Print all available rules."""
    click.echo("Available Rules:\n")

    for rule_name, rule_info in list_rules().items():
        capability = rule_info["capability"]
        gated = f" [needs {capability}]" if capability else ""
        click.echo(f"  {rule_name:<22} {rule_info['description']}{gated}")
        click.echo(f"  {'':<22} callees: {', '.join(rule_info['callees'])}")
    click.echo()


def _print_capabilities(engine: Engine):
    """Probe and print every known capability."""
    for name, capability in CAPABILITIES.items():
        present = engine.capabilities.probe(name)
        status = "yes" if present else "no"
        click.echo(f"  {name:<26} [{status:>3}]  {capability.description} ({capability.requires})")


if __name__ == "__main__":
    main()
