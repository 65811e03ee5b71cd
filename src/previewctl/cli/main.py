"""Entry point for the previewctl command-line interface."""

from __future__ import annotations

import click

from previewctl import __version__
from previewctl.cli.commands.destroy import destroy, status


@click.group(name="previewctl", invoke_without_command=True)
@click.version_option(__version__, prog_name="previewctl")
@click.pass_context
def main(ctx: click.Context) -> None:
    """Manage per-pull-request preview environments.

    Subcommands:

        destroy  Terminate the environment of a pull request

        status   Show the environment status of a pull request
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


main.add_command(destroy)
main.add_command(status)


if __name__ == "__main__":  # pragma: no cover
    main()
