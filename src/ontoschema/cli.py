"""CLI interface for ontoschema using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ontoschema import __description__, __version__
from ontoschema.compiler import SchemaCompiler
from ontoschema.config import OutputFormat, load_config
from ontoschema.constants import FORMAT_SCALAR
from ontoschema.errors import OntoschemaError, ValueCheckError
from ontoschema.models import ValidationRecord
from ontoschema.rules import RenderedRule, RuleChecker

app = typer.Typer(
    name="ontoschema",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()
err_console = Console(stderr=True)

TermsOption = Annotated[
    Optional[Path],
    typer.Option("--terms", "-t", help="JSON terms file extending the built-in ontology")
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Configuration file path (default: search for .ontoschema.json)")
]
OptionsOption = Annotated[
    Optional[str],
    typer.Option("--options", "-o", help="Descriptor options as a JSON object")
]
FormatOption = Annotated[
    str,
    typer.Option("--format", "-f", help="Descriptor format: scalar, list, set (default: scalar)")
]
OutputOption = Annotated[
    Optional[str],
    typer.Option("--output", help="Output format: table, json (default: from config)")
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Enable debug logging")
]


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"ontoschema version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """ontoschema - Hierarchical validation-schema compiler for typed ontology terms."""


def _setup_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_compiler(config: Path | None, terms: Path | None, verbose: bool) -> SchemaCompiler:
    ontoschema_config = load_config(config)
    if terms is not None:
        ontoschema_config.ontology.terms_file = str(terms)
    _setup_logging(logging.DEBUG if verbose else ontoschema_config.logging.numeric_level)
    return SchemaCompiler(config=ontoschema_config)


def _output_format(compiler: SchemaCompiler, output: str | None) -> str:
    fmt = output or compiler.config.output.format
    valid_formats = [f.value for f in OutputFormat]
    if fmt not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid output '{fmt}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)
    return fmt


def _descriptor(type_ref: str, options: str | None, fmt: str) -> dict[str, Any]:
    descriptor: dict[str, Any] = {}
    if options:
        try:
            descriptor = jsonlib.loads(options)
        except jsonlib.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in --options: {e}")
        if not isinstance(descriptor, dict):
            raise ValueError("--options must be a JSON object")
    descriptor["type"] = type_ref
    descriptor["format"] = fmt
    return descriptor


def _record_rows(record: ValidationRecord, prefix: str = "") -> list[tuple[str, str, str]]:
    rows = []
    for field_name, value in record.to_dict().items():
        if field_name in ("child", "key_record", "value_record"):
            continue
        rows.append((prefix or "$", field_name, jsonlib.dumps(value, ensure_ascii=False)))
    for field_name in ("child", "key_record", "value_record"):
        nested = getattr(record, field_name)
        if nested is not None:
            rows.extend(_record_rows(nested, f"{prefix or '$'}.{field_name}"))
    return rows


def _rule_rows(rule: RenderedRule, prefix: str = "") -> list[tuple[str, str, str]]:
    location = prefix or "$"
    rows = [(location, "kind", rule.kind.value)]
    for directive in rule.directives:
        value = "" if directive.value is None else jsonlib.dumps(directive.value, ensure_ascii=False)
        rows.append((location, directive.name.value, value))
    if rule.references:
        rows.append((location, "references", jsonlib.dumps(rule.references, ensure_ascii=False)))
    if rule.cast:
        rows.append((location, "cast", ", ".join(rule.cast)))
    if rule.custom:
        rows.append((location, "custom", ", ".join(rule.custom)))
    for field_name in ("items", "keys", "values"):
        nested = getattr(rule, field_name)
        if nested is not None:
            rows.extend(_rule_rows(nested, f"{location}.{field_name}"))
    return rows


def _print_rows(title: str, rows: list[tuple[str, str, str]]) -> None:
    table = Table(title=title)
    table.add_column("Level", style="cyan")
    table.add_column("Field", style="white")
    table.add_column("Value", style="green")
    for row in rows:
        table.add_row(*row)
    console.print(table)


@app.command()
def hierarchy(
    type_ref: Annotated[str, typer.Argument(help="Type term _key or _id")],
    terms: TermsOption = None,
    config: ConfigOption = None,
    output: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the resolved type-of chain of a type, most specific first."""
    try:
        compiler = _load_compiler(config, terms, verbose)
        fmt = _output_format(compiler, output)
        chain = compiler.provider.resolve_hierarchy(type_ref)

        if fmt == OutputFormat.JSON.value:
            typer.echo(jsonlib.dumps(
                [{"key": node.key, "category": node.category} for node in chain],
                indent=2
            ))
            return

        table = Table(title=f"Type hierarchy: {type_ref}")
        table.add_column("Level", style="cyan", justify="right")
        table.add_column("Term", style="white")
        table.add_column("Category", style="green")
        for level, node in enumerate(chain):
            table.add_row(str(level), node.key, node.category)
        console.print(table)

    except (OntoschemaError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command("compile")
def compile_command(
    type_ref: Annotated[str, typer.Argument(help="Type term _key or _id")],
    options: OptionsOption = None,
    format: FormatOption = FORMAT_SCALAR,
    terms: TermsOption = None,
    config: ConfigOption = None,
    output: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Compile a type and descriptor options into a validation record."""
    try:
        compiler = _load_compiler(config, terms, verbose)
        fmt = _output_format(compiler, output)
        record = compiler.compile_descriptor(_descriptor(type_ref, options, format))

        if fmt == OutputFormat.JSON.value:
            typer.echo(jsonlib.dumps(record.to_dict(), indent=2, ensure_ascii=False))
        else:
            _print_rows(f"Validation record: {type_ref}", _record_rows(record))

    except (OntoschemaError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def render(
    type_ref: Annotated[str, typer.Argument(help="Type term _key or _id")],
    options: OptionsOption = None,
    format: FormatOption = FORMAT_SCALAR,
    required: Annotated[bool, typer.Option("--required", help="Add a required directive")] = False,
    terms: TermsOption = None,
    config: ConfigOption = None,
    output: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Compile a type and render it into a rule tree."""
    try:
        compiler = _load_compiler(config, terms, verbose)
        fmt = _output_format(compiler, output)
        rule = compiler.rule_for_descriptor(_descriptor(type_ref, options, format))
        if required:
            rule = rule.required()

        if fmt == OutputFormat.JSON.value:
            typer.echo(jsonlib.dumps(rule.to_dict(), indent=2, ensure_ascii=False))
        else:
            _print_rows(f"Rule: {type_ref}", _rule_rows(rule))
            console.print(f"[blue]Summary:[/blue] {rule.describe()}")

    except (OntoschemaError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def check(
    type_ref: Annotated[str, typer.Argument(help="Type term _key or _id")],
    value: Annotated[str, typer.Argument(help="Value to check, as JSON (plain text is taken as a string)")],
    options: OptionsOption = None,
    format: FormatOption = FORMAT_SCALAR,
    required: Annotated[bool, typer.Option("--required", help="Reject missing (null) values")] = False,
    terms: TermsOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Check a value against the rule compiled for a type."""
    try:
        compiler = _load_compiler(config, terms, verbose)
        rule = compiler.rule_for_descriptor(_descriptor(type_ref, options, format))
        if required:
            rule = rule.required()

        try:
            data = jsonlib.loads(value)
        except jsonlib.JSONDecodeError:
            data = value

        normalized = RuleChecker().check(rule, data)
        console.print("[green]Valid[/green]")
        typer.echo(jsonlib.dumps(normalized, ensure_ascii=False))

    except ValueCheckError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)
    except (OntoschemaError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
