"""Tracker MCP CLI."""

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.group()
def main():
    """Tracker MCP - one MCP server for Redmine, Jira and Monday.com."""
    pass


@main.command()
def version():
    """Show version."""
    from . import __version__
    console.print(f"tracker-mcp v{__version__}")


@main.command()
def serve():
    """Run the MCP server over stdio using TRACKER_* credentials."""
    from .server import main as run_server

    run_server()


@main.command()
def providers():
    """List supported providers and the credentials they need."""
    from .providers.registry import PROVIDERS

    table = Table(title="Providers")
    table.add_column("Key", style="cyan")
    table.add_column("Label")
    table.add_column("Org fields")
    table.add_column("User fields")

    for meta in PROVIDERS.values():
        table.add_row(
            meta.key,
            meta.label,
            ", ".join(meta.org_fields) or "-",
            ", ".join(meta.user_fields) or "-",
        )

    console.print(table)


@main.command()
def capabilities():
    """Show what the configured provider exposes (no upstream calls)."""
    from .assembler import assemble_server, describe_surface
    from .auth import EnvCredentialResolver
    from .errors import TrackerError
    from .providers.registry import create_for_user

    try:
        adapter = create_for_user(EnvCredentialResolver().resolve())
    except TrackerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    with adapter:
        surface = describe_surface(assemble_server(adapter))

    console.print(f"\n[bold]Provider: {adapter.name}[/bold]")
    table = Table()
    table.add_column("Capability")
    table.add_column("Supported")
    for name, enabled in adapter.capabilities.to_dict().items():
        table.add_row(name, "[green]yes[/green]" if enabled else "[dim]no[/dim]")
    console.print(table)

    console.print("\n[bold]Tools[/bold]")
    for tool in surface["tools"]:
        console.print(f"  {tool}")

    console.print("\n[bold]Resources[/bold]")
    for uri in surface["resources"] or ["(none)"]:
        console.print(f"  {uri}")

    if surface["instructions"]:
        console.print("\n[bold]Instructions[/bold]")
        console.print(surface["instructions"], markup=False)


if __name__ == "__main__":
    main()
