import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from sync_graph.config import get_summary_path
from sync_graph.core.snapshot import GraphSnapshotHolder

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
    summary: Annotated[str | None, typer.Option(help="Path to the query summary JSON.")] = None,
    watch: Annotated[bool, typer.Option(help="Re-sync when the summary file changes.")] = False,
) -> None:
    """Start the MCP server."""
    from sync_graph.mcp.server import create_mcp_server
    from sync_graph.watcher.watchfiles_adapter import SummaryFileWatcher

    summary_path = Path(summary) if summary else get_summary_path()
    snapshots = GraphSnapshotHolder()
    if not snapshots.sync_from(summary_path):
        console.print(f"[red]Could not build the graph from {summary_path}[/red]")
        raise typer.Exit(code=1)

    server = create_mcp_server(snapshots)
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    if not watch:
        server.run(transport=transport)  # type: ignore[arg-type]
        return

    async def _resync(path: Path) -> None:
        await asyncio.to_thread(snapshots.sync_from, path)

    async def _run() -> None:
        watcher = SummaryFileWatcher(summary_path, _resync)
        await watcher.start()
        try:
            await server.run_async(transport=transport)  # type: ignore[arg-type]
        finally:
            await watcher.stop()

    asyncio.run(_run())
