from typing import TYPE_CHECKING, Any, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stringman._serialization import encode_json
from stringman.base import Stringman
from stringman.config import load_config_from_env
from stringman.exceptions import StringmanError
from stringman.utils.logging import LOG_FORMATS, configure_logging

if TYPE_CHECKING:
    from stringman.core.statement import BoundTemplate

__all__ = ("get_stringman_group", "main", "parse_parameter")

_LITERAL_WORDS: "dict[str, Any]" = {"true": True, "false": False, "null": None}


def parse_parameter(raw: str) -> "tuple[str, Any]":
    """Split ``NAME=VALUE`` and convert the value.

    Values parse as int, then float, then ``true``/``false``/``null``;
    anything else stays text.

    Raises:
        click.BadParameter: If there is no ``=``.
    """
    name, sep, value = raw.partition("=")
    if not sep or not name:
        msg = f"expected NAME=VALUE, got {raw!r}"
        raise click.BadParameter(msg)
    for convert in (int, float):
        try:
            return name, convert(value)
        except ValueError:
            continue
    if value.lower() in _LITERAL_WORDS:
        return name, _LITERAL_WORDS[value.lower()]
    return name, value


def _binding_table(templates: "list[BoundTemplate]") -> Table:
    table = Table(title="Templates")
    table.add_column("Id", style="cyan")
    table.add_column("Bindings", justify="right")
    table.add_column("Names")
    for template in templates:
        table.add_row(template.id, str(len(template.bindings)), ", ".join(template.binding_names))
    return table


def get_stringman_group() -> "click.Group":
    """Get the stringman CLI group."""

    @click.group(name="stringman")
    @click.option("--path", "template_path", type=click.Path(exists=True), help="Template directory or file.")
    @click.option("--fileset", default=None, help="Glob pattern for template files inside --path.")
    @click.option("--verbose", "-v", is_flag=True, help="Log loading and registration at debug level.")
    @click.option(
        "--log-format", type=click.Choice(LOG_FORMATS), default="text", show_default=True, help="Log output on stderr."
    )
    @click.pass_context
    def stringman_group(
        ctx: "click.Context", template_path: "Optional[str]", fileset: "Optional[str]", verbose: bool, log_format: str
    ) -> None:
        """Inspect and render named SQL templates."""
        configure_logging(level="DEBUG" if verbose else "WARNING", format_style=log_format)
        config = load_config_from_env()
        changes: dict[str, Any] = {}
        if template_path is not None:
            changes["template_path"] = template_path
        if fileset is not None:
            changes["fileset"] = fileset
        ctx.ensure_object(dict)
        ctx.obj["console"] = Console()
        ctx.obj["config"] = config.replace(**changes) if changes else config

    def _manager(ctx: "click.Context") -> Stringman:
        console: Console = ctx.obj["console"]
        config = ctx.obj["config"]
        if not config.template_path:
            console.print("[red]No template path given (--path or STRINGMAN_TEMPLATE_PATH)[/]")
            ctx.exit(1)
        try:
            return Stringman.from_config(config)
        except StringmanError as e:
            console.print(f"[red]Error loading templates: {escape(str(e))}[/]")
            ctx.exit(1)

    @stringman_group.command(name="list")
    @click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table.")
    @click.pass_context
    def list_templates(ctx: "click.Context", as_json: bool) -> None:
        """List loaded templates and their bindings."""
        manager = _manager(ctx)
        templates = [manager.find(statement_id) for statement_id in manager.list_templates()]
        if as_json:
            click.echo(encode_json([{"id": t.id, "bindings": list(t.binding_names)} for t in templates]))
            return
        ctx.obj["console"].print(_binding_table(templates))

    @stringman_group.command(name="show")
    @click.argument("statement_id")
    @click.pass_context
    def show_template(ctx: "click.Context", statement_id: str) -> None:
        """Show a template, its bindings and its parameterized form."""
        manager = _manager(ctx)
        console: Console = ctx.obj["console"]
        try:
            template = manager.find(statement_id)
        except StringmanError as e:
            console.print(f"[red]{escape(str(e))}[/]")
            ctx.exit(1)
        console.print(f"[bold]{escape(template.id)}[/]")
        console.print(template.text, markup=False, highlight=False)
        for binding in template.bindings:
            console.print(f"  {binding.position}: {binding.name} ({binding.kind})", markup=False)
        console.print(template.parameterized_text, markup=False, highlight=False)

    @stringman_group.command(name="render")
    @click.argument("statement_id")
    @click.option("--param", "-p", "params", multiple=True, help="Parameter as NAME=VALUE; repeatable.")
    @click.pass_context
    def render_template(ctx: "click.Context", statement_id: str, params: "tuple[str, ...]") -> None:
        """Build a template with the given parameters."""
        manager = _manager(ctx)
        parameters = dict(parse_parameter(raw) for raw in params)
        try:
            sql = manager.build(statement_id, parameters)
        except StringmanError as e:
            ctx.obj["console"].print(f"[red]{escape(str(e))}[/]")
            ctx.exit(1)
        click.echo(sql)

    return stringman_group


def main() -> None:
    """Console script entry point."""
    get_stringman_group()(prog_name="stringman")
