"""Inspection commands.

Each command runs one resolution against a file or a piece of text and prints
the result, which is handy when writing schemas and datasets.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mythic_scribe.context import ResolutionContext
from mythic_scribe.datasets.loader import load_dataset
from mythic_scribe.datasets.models import ScribeDataset
from mythic_scribe.document import Position, TextDocument
from mythic_scribe.errors import ScribeError
from mythic_scribe.placeholder.trie import generate_node_completions
from mythic_scribe.schema.library import BUNDLED_SCHEMA_NAMES
from mythic_scribe.script.key_stack import get_ancestor_keys
from mythic_scribe.script.line_grammar import find_enclosing_object_token, parse_mechanic_line
from mythic_scribe.script.linkage import FoundAttribute, FoundMechanic

from mythic_scribe.cli.app import app

console = Console()

DatasetOption = Annotated[
    Optional[Path],
    typer.Option(
        "--dataset",
        "-d",
        help="Dataset file (YAML or JSON)",
        exists=True,
        dir_okay=False,
    ),
]


def _load_context(dataset: Optional[Path]) -> ResolutionContext:
    try:
        data = load_dataset(dataset) if dataset else ScribeDataset()
    except ScribeError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    return ResolutionContext(data)


def _read_document(file: Path) -> TextDocument:
    return TextDocument(file.read_text(encoding="utf-8"))


@app.command()
def keys(
    file: Annotated[Path, typer.Argument(help="Script file", exists=True, dir_okay=False)],
    line: Annotated[int, typer.Argument(help="Zero-based line number")],
):
    """Show the keys enclosing a line, innermost first."""
    document = _read_document(file)
    ancestors = get_ancestor_keys(document, Position(line, 0))
    if not ancestors:
        console.print("[yellow]No enclosing keys.[/yellow]")
        return

    table = Table(title=f"Keys enclosing line {line}")
    table.add_column("Key", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Indent", justify="right")
    for key in ancestors:
        table.add_row(key.key, str(key.line), str(key.indent))
    console.print(table)


@app.command(context_settings={"ignore_unknown_options": True})
def line(
    text: Annotated[str, typer.Argument(help="A mechanic line, e.g. '- damage{a=1} @self'")],
):
    """Split a mechanic line into its parts."""
    parts = parse_mechanic_line(text)
    if not parts:
        console.print("[yellow]Not a mechanic line.[/yellow]")
        raise typer.Exit(1)

    table = Table(title="Mechanic line")
    table.add_column("Part", style="cyan")
    table.add_column("Text")
    for name in ("mechanic", "targeter", "trigger", "conditions"):
        if name in parts:
            table.add_row(name, escape(parts[name]))
    console.print(table)

    owner = find_enclosing_object_token(text)
    if owner:
        console.print(f"Open scope owner at end of line: [green]{escape(owner)}[/green]")


@app.command()
def owner(
    file: Annotated[Path, typer.Argument(help="Script file", exists=True, dir_okay=False)],
    line: Annotated[int, typer.Argument(help="Zero-based line number")],
    column: Annotated[int, typer.Argument(help="Zero-based character offset")],
    dataset: DatasetOption = None,
):
    """Resolve the object or attribute under a cursor position."""
    context = _load_context(dataset)
    document = _read_document(file)
    found = context.resolve_owner(document, Position(line, column))

    match found:
        case FoundMechanic(mechanic=mechanic):
            console.print(
                f"[green]{mechanic.registry.object_type.value}[/green] {mechanic.name[0]}"
                f" ({mechanic.plugin})"
            )
            if mechanic.description:
                console.print(mechanic.description)
        case FoundAttribute(attribute=attribute):
            console.print(
                f"[green]Attribute[/green] {context.attribute_label(attribute)}"
                f" of {attribute.mechanic.name[0]}"
            )
            if attribute.description:
                console.print(attribute.description)
        case _:
            console.print("[yellow]Nothing resolved at this position.[/yellow]")
            raise typer.Exit(1)


@app.command()
def schema(
    name: Annotated[str, typer.Argument(help=f"Schema name: {', '.join(BUNDLED_SCHEMA_NAMES)}")],
    path: Annotated[list[str], typer.Argument(help="Key path, outermost first")],
    dataset: DatasetOption = None,
):
    """Locate the schema node at the end of a key path."""
    if name not in BUNDLED_SCHEMA_NAMES:
        console.print(f"[red]Unknown schema {name!r}[/red]")
        raise typer.Exit(1)

    context = _load_context(dataset)
    located = context.locate(name, path)
    if located is None:
        console.print(f"[yellow]No schema node at {'.'.join(path)}[/yellow]")
        raise typer.Exit(1)

    node, depth = located
    table = Table(title=f"{name}: {'.'.join(path)}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("kind", node.kind.value)
    table.add_row("depth", str(depth))
    for field_name in ("dataset", "key_dataset", "description", "link", "plugin"):
        value = getattr(node, field_name)
        if value:
            table.add_row(field_name, str(value))
    if node.values:
        table.add_row("values", ", ".join(node.values[:10]))
    console.print(table)


@app.command()
def placeholder(
    text: Annotated[str, typer.Argument(help="Dotted path, or text ending inside <...>")],
    dataset: DatasetOption = None,
):
    """Look up a placeholder path, or complete an open <...> expression."""
    context = _load_context(dataset)

    if "<" in text:
        candidates = context.complete_placeholder(text)
    else:
        node = context.lookup_placeholder(text)
        if node is None:
            console.print(f"[yellow]Unknown placeholder {text!r}[/yellow]")
            raise typer.Exit(1)
        console.print(f"{text}: {'complete' if node.is_end else 'prefix'}")
        candidates = generate_node_completions(node)

    if not candidates:
        console.print("[yellow]No completions.[/yellow]")
        return

    table = Table(title="Completions")
    table.add_column("Label", style="cyan")
    table.add_column("Insert")
    for candidate in candidates:
        table.add_row(escape(candidate.label), escape(candidate.insert_text))
    console.print(table)
