"""main.py - The ``symcat`` command.

``show``, ``status``, ``revert`` and ``apply`` each take options only, so
their callbacks become flat commands.  ``edit`` has subcommands and is
mounted as a group.
"""

import importlib

import typer

from symcat.cli import configure_logging

app = typer.Typer(
    help="Curate scripting define symbols and sync them with build target groups.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  symcat revert                Pull the current define symbols into the catalog
  symcat edit add USE_STEAM    Add a symbol (or header / separator)
  symcat edit enable USE_STEAM Toggle symbols on or off
  symcat status                See which target groups have drifted
  symcat apply --all           Push enabled symbols to every target group

[dim]All subcommands read project settings from symcat.toml.
Run 'symcat <cmd> --help' for details.[/dim]""",
)

# (command, module, help, is_group)
_COMMANDS: list[tuple[str, str, str, bool]] = [
    ("show", "symcat.show", "Print the symbol catalog.", False),
    ("status", "symcat.status", "Show define-symbol drift across target groups.", False),
    ("revert", "symcat.revert", "Pull define symbols from the settings into the catalog.", False),
    ("apply", "symcat.apply", "Push enabled catalog symbols to the build settings.", False),
    ("edit", "symcat.edit", "Add, remove, toggle, and annotate catalog entries.", True),
]


@app.callback()
def _root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging(verbose)


def _register(name: str, module: str, help_text: str, is_group: bool) -> None:
    mod = importlib.import_module(module)
    if is_group:
        app.add_typer(mod.app, name=name, help=help_text)
        return
    epilog = mod.app.info.epilog
    app.command(name=name, help=help_text, epilog=epilog if isinstance(epilog, str) else None)(
        mod.main
    )


for _entry in _COMMANDS:
    _register(*_entry)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
