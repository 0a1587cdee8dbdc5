"""Typer-based CLI for tagtodos."""

import json
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.tree import Tree

from .config import TodoConfig
from .models import DisplayChunk, TodoGroup, TodoItem
from .navigation import open_document
from .pipeline import group_todos, parse_todos
from .tags import MalformedTagError
from .toggle import toggle_line
from .vault import VaultStore

app = typer.Typer(
    name="tagtodos",
    help="tagtodos - Collect tagged markdown todos from a vault",
    add_completion=False,
)

console = Console()


def _configure_logging(debug: bool) -> None:
    if not debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_config(vault_path: Optional[str], **overrides) -> TodoConfig:
    try:
        return TodoConfig.from_env(cli_vault_path=vault_path, **overrides)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def render_chunks(chunks: list[DisplayChunk]) -> str:
    """Render a display tree as rich console markup."""
    parts: list[str] = []
    for chunk in chunks:
        if chunk.type == "text":
            parts.append(escape(chunk.value))
        elif chunk.type == "bold":
            parts.append(f"[bold]{render_chunks(chunk.children)}[/bold]")
        elif chunk.type == "italic":
            parts.append(f"[italic]{render_chunks(chunk.children)}[/italic]")
        else:
            # Show the label for resolved links, the raw text otherwise
            inner = escape(chunk.label) if chunk.label else render_chunks(chunk.children)
            style = "blue underline" if chunk.file_path else "blue"
            parts.append(f"[{style}]{inner}[/]")
    return "".join(parts)


def _add_todo(parent: Tree, todo: TodoItem) -> None:
    box = "[green]\\[x][/green]" if todo.checked else "\\[ ]"
    branch = parent.add(
        f"{box} {render_chunks(todo.display)} [dim]{escape(todo.file_path)}:{todo.line}[/dim]"
    )
    for child in todo.children:
        _add_todo(branch, child)


def _print_groups(groups: list[TodoGroup]) -> None:
    for group in groups:
        title = group.group_name or group.group_id
        tree = Tree(f"[bold cyan]{escape(title)}[/bold cyan] [dim]({len(group.todos)})[/dim]")
        for todo in group.todos:
            _add_todo(tree, todo)
        console.print(tree)


@app.command("list")
def list_todos(
    vault_path: str = typer.Option(
        None,
        "--vault",
        "-v",
        help="Path to vault directory (default: .tagtodos/config.toml, TAGTODOS_VAULT or cwd)",
    ),
    tag: str = typer.Option(
        None,
        "--tag",
        "-t",
        help="Only collect todos following this tag, e.g. 'todo' for #todo and #todo/work",
    ),
    sort: str = typer.Option(
        None,
        "--sort",
        help="Order by document creation time: 'new->old' or 'old->new'",
    ),
    group_by: str = typer.Option(
        None,
        "--group-by",
        "-g",
        help="Group by 'page' or 'tag'",
    ),
    ignore: str = typer.Option(
        None,
        "--ignore",
        help="Skip documents inside folders with this name",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print groups as JSON",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
):
    """List todos in the vault, grouped by page or tag."""
    _configure_logging(debug)
    config = _load_config(vault_path, tag=tag, sort=sort, group_by=group_by, ignore_folder=ignore)
    store = VaultStore(config.vault_path, config.exclude_globs)

    try:
        todos = parse_todos(
            store.list_documents(),
            store,
            tag_filter=config.tag,
            sort=config.sort,
            ignored_folder=config.ignore_folder,
            max_workers=config.max_workers,
        )
    except (MalformedTagError, OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    groups = group_todos(todos, config.group_by)

    if as_json:
        typer.echo(json.dumps([g.model_dump(mode="json") for g in groups], indent=2))
        return

    if not groups:
        console.print("[dim]No todos found[/dim]")
        return
    _print_groups(groups)


@app.command()
def toggle(
    path: str = typer.Argument(..., help="Document path relative to the vault"),
    line: int = typer.Argument(..., help="Zero-based line number of the todo"),
    vault_path: str = typer.Option(
        None,
        "--vault",
        "-v",
        help="Path to vault directory (default: .tagtodos/config.toml, TAGTODOS_VAULT or cwd)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
):
    """Tick or untick the todo at PATH:LINE."""
    _configure_logging(debug)
    config = _load_config(vault_path)
    store = VaultStore(config.vault_path, config.exclude_globs)

    new_state = toggle_line(store, path, line)
    if new_state is None:
        console.print(f"[red]Error: No todo at {escape(path)}:{line}[/red]")
        raise typer.Exit(code=1)
    label = "checked" if new_state else "unchecked"
    console.print(f"[green]+[/green] {escape(path)}:{line} {label}")


@app.command("open")
def open_link(
    link: str = typer.Argument(..., help="Link target, e.g. 'Projects/Plan' or 'Plan.md'"),
    reveal: bool = typer.Option(
        False,
        "--reveal",
        help="Show the file in the file manager instead of opening it",
    ),
    vault_path: str = typer.Option(
        None,
        "--vault",
        "-v",
        help="Path to vault directory (default: .tagtodos/config.toml, TAGTODOS_VAULT or cwd)",
    ),
):
    """Open the document a link points to."""
    config = _load_config(vault_path)
    store = VaultStore(config.vault_path, config.exclude_globs)

    def _launch(document, new_pane: bool) -> None:
        typer.launch(str(config.vault_path / document.path), locate=new_pane)

    document = open_document(link, store, _launch, new_pane=reveal)
    if document is None:
        console.print(f"[red]Error: No document matches {escape(link)}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[dim]Opened {escape(document.path)}[/dim]")


@app.command()
def version():
    """Show tagtodos version."""
    from . import __version__
    console.print(f"tagtodos v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
