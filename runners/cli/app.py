from __future__ import annotations

import typer

from runners import __version__
from runners.cli.commands.publish import add_file, push_dir, push_file

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("add-file")(add_file)
app.command("push-file")(push_file)
app.command("push-dir")(push_dir)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
