"""CLI entry point; registers all subcommands."""

import typer
from typer.core import TyperGroup

DEFAULT_COMMAND = "analyze"


class DefaultCommandGroup(TyperGroup):
    """Group that runs ``analyze`` when no subcommand is named.

    ``onboardx /repo -o OUT`` is read as ``onboardx analyze /repo -o OUT``.
    """

    def parse_args(self, ctx, args):
        if not args or (args[0] not in self.commands and args[0] not in ctx.help_option_names):
            args = [DEFAULT_COMMAND, *args]
        return super().parse_args(ctx, args)


app = typer.Typer(
    name="onboardx",
    cls=DefaultCommandGroup,
    help="onboardx - generate an ONBOARD.md guide for any git repository",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .init_ci import init_ci as _init_ci  # noqa: F401, E402
