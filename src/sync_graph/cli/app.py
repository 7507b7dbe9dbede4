import logging

import typer

from sync_graph.cli.query import query_app
from sync_graph.cli.serve import serve_app
from sync_graph.config import get_log_level

app = typer.Typer(
    name="sync-graph",
    help="Resolve build targets and dependencies for workspace paths.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(query_app, name="query")
app.add_typer(serve_app, name="serve")


@app.callback()
def _configure_logging() -> None:
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    app()
