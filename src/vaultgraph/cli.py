"""Typer-based CLI for vaultgraph."""

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import ConfigError, VaultConfig, load_vault_config, resolve_vault_root
from .parser import DocumentSource, ParsedDocument, parse_documents
from .paths import file_path_to_object_id, object_id_to_file_path, relative_vault_path

app = typer.Typer(
    name="vaultgraph",
    help="vaultgraph - parse markdown vaults into object graphs",
    add_completion=False,
)

console = Console()

logger = logging.getLogger(__name__)


def _load_config(vault_path: Optional[str]) -> VaultConfig:
    """Resolve the vault and load its config, exiting on errors.

    Without --vault, a missing vault falls back to the CWD with defaults.
    """
    try:
        vault_root = resolve_vault_root(vault_path)
    except FileNotFoundError as e:
        if vault_path:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)
        logger.debug(f"No vault found, using current directory: {e}")
        vault_root = Path.cwd()

    try:
        return load_vault_config(vault_root)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _print_document(doc: ParsedDocument) -> None:
    console.print(f"[bold cyan]{escape(doc.file_path)}[/bold cyan]")

    table = Table(title="Objects")
    table.add_column("ID", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Parent", style="dim")
    table.add_column("Lines", style="green")
    for obj in doc.objects:
        end = str(obj.line_end) if obj.line_end is not None else "EOF"
        table.add_row(escape(obj.id), escape(obj.object_type), escape(obj.parent_id or "-"), f"{obj.line_start}-{end}")
    console.print(table)

    if doc.traits:
        traits = Table(title="Traits")
        traits.add_column("Line", style="green")
        traits.add_column("Trait", style="magenta")
        traits.add_column("Value", style="yellow")
        traits.add_column("Object", style="cyan")
        traits.add_column("Content")
        for t in doc.traits:
            traits.add_row(
                str(t.line),
                escape(t.trait_name),
                escape(t.value_string() or "-"),
                escape(t.parent_object_id),
                escape(t.content),
            )
        console.print(traits)

    if doc.refs:
        refs = Table(title="References")
        refs.add_column("Line", style="green")
        refs.add_column("Target", style="yellow")
        refs.add_column("Display")
        refs.add_column("Source", style="cyan")
        for r in doc.refs:
            refs.add_row(str(r.line), escape(r.target_raw), escape(r.display_text or "-"), escape(r.source_id))
        console.print(refs)


@app.command()
def parse(
    files: List[Path] = typer.Argument(..., help="Markdown files to parse"),
    vault_path: str = typer.Option(
        None,
        "--vault",
        "-v",
        help="Path to vault directory (default: VAULTGRAPH_VAULT env or nearest raven.yaml)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the parsed graph as JSON",
    ),
    workers: int = typer.Option(
        0,
        "--workers",
        "-w",
        help="Parser threads (default: min(8, CPU count))",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable debug logging",
    ),
):
    """Parse markdown files and show their objects, traits and references.

    Files that cannot be read or parsed are reported and skipped; the exit
    code is 1 if any file failed.
    """
    _setup_logging(verbose)
    config = _load_config(vault_path)
    vault_root = str(config.vault_path.resolve())

    sources: list[DocumentSource] = []
    read_errors: list[tuple[str, str]] = []
    for file in files:
        try:
            content = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            read_errors.append((str(file), str(e)))
            continue
        sources.append(DocumentSource(file_path=str(file.resolve()), content=content))

    result = parse_documents(
        sources,
        options=config.parse_options(),
        vault_path=vault_root,
        max_workers=workers or None,
    )

    if as_json:
        payload = {
            "documents": [doc.to_dict() for doc in result.documents],
            "errors": [
                {"file_path": relative_vault_path(f.file_path, vault_root), "error": f.message}
                for f in result.failures
            ]
            + [{"file_path": path, "error": message} for path, message in read_errors],
        }
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        for doc in result.documents:
            _print_document(doc)
            console.print()
        for failure in result.failures:
            console.print(f"[red]Parse error:[/red] {escape(relative_vault_path(failure.file_path, vault_root))}: {escape(failure.message)}")
        for path, message in read_errors:
            console.print(f"[red]Read error:[/red] {escape(path)}: {escape(message)}")

    if result.failures or read_errors:
        raise typer.Exit(code=1)


@app.command("object-id")
def object_id(
    file_path: str = typer.Argument(..., help="Vault-relative markdown path"),
    vault_path: str = typer.Option(
        None,
        "--vault",
        "-v",
        help="Path to vault directory (default: VAULTGRAPH_VAULT env or nearest raven.yaml)",
    ),
):
    """Print the object ID for a vault-relative file path."""
    options = _load_config(vault_path).parse_options()
    typer.echo(file_path_to_object_id(file_path, options.objects_root, options.pages_root))


@app.command("file-path")
def file_path(
    object_id: str = typer.Argument(..., help="Object ID, e.g. people/freya"),
    type_name: str = typer.Option(
        "",
        "--type",
        "-t",
        help="Object type; empty or 'page' maps to the pages root",
    ),
    vault_path: str = typer.Option(
        None,
        "--vault",
        "-v",
        help="Path to vault directory (default: VAULTGRAPH_VAULT env or nearest raven.yaml)",
    ),
):
    """Print the vault-relative file path for an object ID."""
    options = _load_config(vault_path).parse_options()
    typer.echo(object_id_to_file_path(object_id, type_name, options.objects_root, options.pages_root))


@app.command()
def version():
    """Show vaultgraph version."""
    from . import __version__
    console.print(f"vaultgraph v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
