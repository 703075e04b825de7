"""Click CLI for goto.

Running ``goto`` with no arguments loads ~/.goto/.goto.yaml, shows the
menu, and replaces itself with the chosen command.
"""

from pathlib import Path

import click

from goto_core import docs, paths, store
from goto_core.colors import colorize
from goto_core.launcher import ConfigurationError, LaunchError, ShellResolutionError, launch
from goto_core.tui.app import MenuError, UserCancellation, select
from goto_core.version import get_version

_log = paths.configure_logger("goto.cli")

# Make -h and --help both work everywhere
CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

LONG_HELP = f"""An interactive command-line tool to manage your environments.

Commands are read from ~/.goto/.goto.yaml, which is created with a
Help entry on first run.  Complete documentation is available at
{store.DOCS_URL}"""


def _fail(message) -> None:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def run_menu(config_path: Path | None) -> int:
    """Load config, show the menu, launch the selection.

    Returns the exit code to use.  With exec available this only returns
    on failure or cancellation.
    """
    try:
        conf = store.load(config_path)
    except store.ConfigLoadError as e:
        _log.warning("Config load failed: %s", e)
        _fail(e)

    try:
        idx = select(conf.commands, conf.start_in_search_mode)
    except UserCancellation:
        return 0
    except MenuError as e:
        _fail(e)

    entry = conf.commands[idx]
    click.echo(f"{click.style('✔', fg='green')} Going to {colorize(entry.color, entry.name)}")
    try:
        return launch(entry, conf)
    except (ConfigurationError, ShellResolutionError, LaunchError) as e:
        _log.warning("Launch of %r failed: %s", entry.name, e)
        _fail(e)


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS,
             help=LONG_HELP,
             short_help="Goto is an interactive command-line tool to manage your environments")
@click.version_option(get_version(), "-v", "--version", prog_name="goto")
@click.option("-c", "--config", "config_path", default=None, envvar="GOTO_CONFIG",
              type=click.Path(dir_okay=False, path_type=Path),
              help="Config file (default ~/.goto/.goto.yaml, or set GOTO_CONFIG)")
@click.option("--debug", is_flag=True, default=False,
              help="Write debug output to ~/.goto/debug/goto.log")
@click.pass_context
def cli(ctx, config_path: Path | None, debug: bool):
    if debug:
        paths.set_debug(True)
    if ctx.invoked_subcommand is None:
        raise SystemExit(run_menu(config_path))


@cli.command("gen-man", hidden=True)
@click.argument("directory", type=click.Path(file_okay=False, path_type=Path))
def gen_man_cmd(directory: Path):
    """Write man pages for goto into DIRECTORY."""
    for path in docs.gen_man_tree(cli, directory):
        click.echo(f"Wrote {path}")


@cli.command("gen-markdown", hidden=True)
@click.argument("directory", type=click.Path(file_okay=False, path_type=Path))
def gen_markdown_cmd(directory: Path):
    """Write markdown docs for goto into DIRECTORY."""
    for path in docs.gen_markdown_tree(cli, directory):
        click.echo(f"Wrote {path}")


def main():
    cli(prog_name="goto")


if __name__ == "__main__":
    main()
