"""Man page and markdown generation from the click command tree."""

from datetime import datetime
from pathlib import Path

import click

from goto_core.version import get_version


def _walk(cmd: click.Command, name: str, parent: click.Context | None = None):
    """Yield ``(context, command)`` for *cmd* and its visible subcommands."""
    ctx = click.Context(cmd, info_name=name, parent=parent)
    yield ctx, cmd
    if isinstance(cmd, click.Group):
        for sub_name in cmd.list_commands(ctx):
            sub = cmd.get_command(ctx, sub_name)
            if sub is None or sub.hidden:
                continue
            yield from _walk(sub, sub_name, ctx)


def _usage(ctx: click.Context, cmd: click.Command) -> str:
    return f"{ctx.command_path} {' '.join(cmd.collect_usage_pieces(ctx))}".rstrip()


def _options(ctx: click.Context, cmd: click.Command) -> list[tuple[str, str]]:
    records = []
    for param in cmd.get_params(ctx):
        record = param.get_help_record(ctx)
        if record is not None:
            records.append(record)
    return records


def _slug(ctx: click.Context) -> str:
    return ctx.command_path.replace(" ", "_")


def markdown(ctx: click.Context, cmd: click.Command) -> str:
    """Render one command as a markdown page."""
    lines = [f"## {ctx.command_path}", ""]
    short = cmd.get_short_help_str(limit=200)
    if short:
        lines += [short, ""]
    if cmd.help:
        lines += ["### Synopsis", "", cmd.help.replace("\b\n", "").strip(), ""]
    lines += ["```", _usage(ctx, cmd), "```", ""]
    options = _options(ctx, cmd)
    if options:
        width = max(len(flag) for flag, _ in options)
        lines += ["### Options", "", "```"]
        lines += [f"  {flag.ljust(width)}   {help_text}" for flag, help_text in options]
        lines += ["```", ""]
    return "\n".join(lines)


def _roff(text: str) -> str:
    text = text.replace("\\", "\\e").replace("-", "\\-")
    lines = [("\\&" + line) if line.startswith((".", "'")) else line
             for line in text.splitlines()]
    return "\n".join(lines)


def man_page(ctx: click.Context, cmd: click.Command, date: str | None = None) -> str:
    """Render one command as a roff man page (section 1)."""
    if date is None:
        date = datetime.now().strftime("%b %Y")
    title = ctx.command_path.upper().replace(" ", "-")
    lines = [
        f'.TH "{title}" "1" "{date}" "goto {get_version()}" "User Commands"',
        ".SH NAME",
        f"{_roff(ctx.command_path)} \\- {_roff(cmd.get_short_help_str(limit=200))}",
        ".SH SYNOPSIS",
        f"\\fB{_roff(_usage(ctx, cmd))}\\fP",
    ]
    if cmd.help:
        lines += [".SH DESCRIPTION", _roff(cmd.help.replace("\b\n", "").strip())]
    options = _options(ctx, cmd)
    if options:
        lines.append(".SH OPTIONS")
        for flag, help_text in options:
            lines += [".TP", f"\\fB{_roff(flag)}\\fP", _roff(help_text)]
    return "\n".join(lines) + "\n"


def gen_markdown_tree(cmd: click.Command, directory: Path, name: str = "goto") -> list[Path]:
    """Write one ``<command>.md`` per visible command into *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for ctx, sub in _walk(cmd, name):
        path = directory / f"{_slug(ctx)}.md"
        path.write_text(markdown(ctx, sub))
        written.append(path)
    return written


def gen_man_tree(cmd: click.Command, directory: Path, name: str = "goto") -> list[Path]:
    """Write one ``<command>.1`` per visible command into *directory*."""
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for ctx, sub in _walk(cmd, name):
        path = directory / f"{_slug(ctx).replace('_', '-')}.1"
        path.write_text(man_page(ctx, sub))
        written.append(path)
    return written
