"""Command-line interface for inspecting types."""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from reflectkit.reflection import ReflectionError, get_type_info

from .config import InspectorConfigError, InspectorSettings
from .stub import render_summary
from .summary import TypeSummary, summarize

logger = logging.getLogger(__name__)


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


@click.group()
@click.option("--log-level", default=None, help="Logging level (default: REFLECTKIT_LOG_LEVEL or WARNING)")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Inspect the public surface of Python classes."""
    try:
        settings = InspectorSettings.from_env().with_overrides(log_level=log_level)
    except InspectorConfigError as ex:
        raise click.UsageError(str(ex)) from ex

    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    ctx.obj = settings


def _load(settings: InspectorSettings, type_name: str, inherited: bool | None) -> TypeSummary:
    try:
        descriptor = get_type_info(type_name)
    except ReflectionError as ex:
        print(str(ex))
        sys.exit(1)

    show_inherited = settings.show_inherited if inherited is None else inherited
    logger.debug("Summarizing %s (inherited=%s)", type_name, show_inherited)
    return summarize(descriptor, show_inherited)


@cli.command()
@click.argument("type_name")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.option("--inherited/--no-inherited", default=None, help="Include members declared on bases")
@click.pass_obj
def info(settings: InspectorSettings, type_name: str, output_json: bool, inherited: bool | None) -> None:
    """Display the members of TYPE_NAME (e.g. collections.OrderedDict)."""
    summary = _load(settings, type_name, inherited)

    if output_json:
        print(summary.to_json(indent=settings.json_indent))
    else:
        _output_plain(summary)


@cli.command()
@click.argument("type_name")
@click.option("--output", "-o", "output_file", default=None, help="Output file (default: stdout)")
@click.option("--inherited/--no-inherited", default=None, help="Include members declared on bases")
@click.pass_obj
def stub(
    settings: InspectorSettings, type_name: str, output_file: str | None, inherited: bool | None
) -> None:
    """Write a stub outline of TYPE_NAME."""
    text = render_summary(_load(settings, type_name, inherited))

    if output_file is None:
        print(text, end="")
        return

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(text)


def _output_plain(summary: TypeSummary) -> None:
    """Output a type summary using rich tables."""
    console = Console()

    console.print(f"[bold cyan]{escape(summary.module)}.{escape(summary.name)}[/bold cyan]")
    if summary.interfaces:
        interfaces = escape(", ".join(summary.interfaces))
        console.print(f"[dim]implements[/dim] {interfaces}")
    console.print()

    if summary.properties:
        console.print("[bold cyan]Properties[/bold cyan]")
        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Name", style="white")
        table.add_column("Type", style="yellow")
        table.add_column("Get")
        table.add_column("Set")
        table.add_column("Nullable")
        table.add_column("Basic")
        for p in summary.properties:
            table.add_row(
                escape(p.name),
                escape(p.type),
                _flag(p.gettable),
                _flag(p.settable),
                _flag(p.nullable),
                _flag(p.basic_type),
            )
        console.print(table)
        console.print()

    if summary.methods:
        console.print("[bold cyan]Methods[/bold cyan]")
        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Name", style="white")
        table.add_column("Parameters", style="yellow")
        table.add_column("Returns", style="green")
        for m in summary.methods:
            params = ", ".join(
                f"{p.name}: {p.type}" + (f" = {p.default}" if p.default is not None else "")
                for p in m.parameters
            )
            name = f"{escape(m.name)} [dim](generic)[/dim]" if m.generic else escape(m.name)
            table.add_row(name, escape(params), escape(m.returns))
        console.print(table)
        console.print()

    if summary.fields:
        console.print("[bold cyan]Fields[/bold cyan]")
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        table.add_column("Name", style="white")
        table.add_column("Type", style="yellow")
        table.add_column("Default", style="dim")
        for f in summary.fields:
            table.add_row(escape(f.name), escape(f.type), escape(f.default or ""))
        console.print(table)
        console.print()

    if summary.events:
        console.print("[bold cyan]Events[/bold cyan]")
        for e in summary.events:
            console.print(f"  {escape(e.name)} [dim]({escape(e.handler_type)})[/dim]")
        console.print()

    console.print(f"[dim]{len(summary.constructors)} constructor(s)[/dim]")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
