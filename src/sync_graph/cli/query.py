from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from sync_graph.config import get_summary_path
from sync_graph.core.build_graph import BuildGraphData
from sync_graph.core.context import LoggingContext
from sync_graph.core.ingest import load_graph
from sync_graph.core.labels import Label
from sync_graph.core.project_target import SourceType
from sync_graph.core.rule_kinds import KindCategory, predicate_for_category

query_app = typer.Typer(help="Query the project build graph.")
console = Console()
err_console = Console(stderr=True)

SummaryOption = Annotated[str | None, typer.Option("--summary", help="Path to the query summary JSON.")]


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _get_graph(summary: str | None) -> BuildGraphData:
    path = Path(summary) if summary else get_summary_path()
    try:
        return load_graph(path)
    except FileNotFoundError:
        err_console.print(f"[red]Query summary not found:[/red] {path}")
        raise typer.Exit(code=1) from None
    except ValueError as e:
        err_console.print(f"[red]Invalid query summary {path}:[/red] {e}")
        raise typer.Exit(code=1) from None


def _parse_label(value: str) -> Label:
    try:
        return Label.of(value)
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from None


def _label_rows(labels: frozenset[Label]) -> list[tuple[str]]:
    return [(str(label),) for label in sorted(labels)]


@query_app.command("summary")
def summary(summary: SummaryOption = None) -> None:
    """Show counts of targets, packages, external deps and source files."""
    graph = _get_graph(summary)
    _render_table(
        ["metric", "count"],
        [
            ("targets", len(graph.target_map)),
            ("packages", len(graph.packages)),
            ("project_deps", len(graph.project_deps)),
            ("source_files", len(graph.get_all_source_files())),
        ],
    )


@query_app.command("targets")
def targets(
    path: Annotated[str, typer.Argument(help="Workspace relative file, directory or build file.")],
    summary: SummaryOption = None,
) -> None:
    """Resolve the project targets for a workspace path."""
    graph = _get_graph(summary)
    context = LoggingContext()
    result = graph.get_project_targets(context, path)
    for message in context.outputs:
        err_console.print(f"[yellow]{message.text}[/yellow]")
    console.print(f"Resolved as [bold]{result.type.value}[/bold]")
    _render_table(["label"], _label_rows(result.targets))


@query_app.command("deps")
def deps(
    label: Annotated[str, typer.Argument(help="Project target label.")],
    summary: SummaryOption = None,
) -> None:
    """List the transitive external dependencies of a target."""
    graph = _get_graph(summary)
    _render_table(["label"], _label_rows(graph.get_transitive_external_dependencies(_parse_label(label))))


@query_app.command("build-deps")
def build_deps(
    label: Annotated[str, typer.Argument(help="Project target label.")],
    summary: SummaryOption = None,
) -> None:
    """List the targets to build so that a target can be analyzed."""
    graph = _get_graph(summary)
    _render_table(["label"], _label_rows(graph.get_external_deps_to_build_for(_parse_label(label))))


@query_app.command("rdeps")
def rdeps(
    path: Annotated[str, typer.Argument(help="Workspace relative source file.")],
    summary: SummaryOption = None,
) -> None:
    """List the project targets depending on a source file."""
    graph = _get_graph(summary)
    rows = [(str(t.label), t.kind) for t in graph.get_reverse_deps_for_source(path)]
    _render_table(["label", "kind"], rows)


@query_app.command("requested")
def requested(
    labels: Annotated[list[str], typer.Argument(help="Project target labels to build.")],
    summary: SummaryOption = None,
) -> None:
    """Show what a build of the given targets requests and expects back."""
    graph = _get_graph(summary)
    result = graph.compute_requested_targets(frozenset(_parse_label(v) for v in labels))
    rows = [("build", str(label)) for label in sorted(result.build_targets)]
    rows += [("expected", str(label)) for label in sorted(result.expected_dependency_targets)]
    _render_table(["role", "label"], rows)


@query_app.command("sources")
def sources(
    category: Annotated[KindCategory, typer.Option(help="Rule kind category.")],
    source_type: Annotated[SourceType, typer.Option("--type", help="Source type.")] = SourceType.REGULAR,
    summary: SummaryOption = None,
) -> None:
    """List workspace source files of rules in a kind category."""
    graph = _get_graph(summary)
    paths = graph.get_source_files_by_rule_kind_and_type(predicate_for_category(category), source_type)
    _render_table(["path"], [(str(p),) for p in paths])
