"""Command-line entry point: print the data served by the configured DataSource."""

import typer

from learning_crud.config import load_config, split_overrides
from learning_crud.data.errors import MissingBindingError
from learning_crud.data.util import bind_data_source, get_data_source
from learning_crud.logging import get_logger


def create_cli_app() -> typer.Typer:
    """Create the CLI application.

    Returns:
        Typer application with the single ``run`` command registered
    """
    app = typer.Typer(
        name="learning-crud",
        help="Print the data served by the DataSource selected by project.mode",
        add_completion=False,
    )

    @app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
    def run(ctx: typer.Context) -> None:
        """Resolve the DataSource and print its data.

        Configuration can be overridden with ``--key=value`` or ``-Dkey=value``,
        e.g. ``-Dproject.mode=production``.
        """
        overrides, ignored = split_overrides(ctx.args)
        load_config(**overrides)
        logger = get_logger(__name__)
        for arg in ignored:
            logger.warning(f"Ignoring argument {arg!r}: expected --key=value or -Dkey=value")

        bind_data_source()
        try:
            source = get_data_source()
        except MissingBindingError as exc:
            logger.error(str(exc))
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(code=1)

        typer.echo(source.get_data())

    return app


app = create_cli_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
