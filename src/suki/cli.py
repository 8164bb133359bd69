"""suki CLI: tag files in the current directory.

Commands:
    suki tag FILE TAG...       add FILE under every TAG          (alias: t)
    suki remove FILE TAG...    remove FILE from every TAG        (alias: r)
    suki search TAG...         files carrying all of the TAGs    (alias: s)
    suki list                  dump every tag and its files      (alias: l)
    suki help                  show this help                    (alias: h)
    suki version               show the version                  (alias: v)
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from suki import __version__
from suki.config import ConfigParser
from suki.errors import SukiError
from suki.models import SukiConfig
from suki.tools.codec import load, save, serialize
from suki.tools.tag_index import add_file_to_tags, intersect_search, remove_file_from_tags

logger = logging.getLogger("suki.cli")

ALIASES = {
    "t": "tag",
    "r": "remove",
    "s": "search",
    "l": "list",
    "h": "help",
    "v": "version",
}


class AliasedGroup(click.Group):
    """Group that also resolves the one-letter command aliases."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx: click.Context, args: list[str]):
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _config(ctx: click.Context) -> SukiConfig:
    return ctx.find_object(SukiConfig) or SukiConfig()


def _directory() -> Path:
    return Path.cwd()


def _debug(ctx: click.Context, debug: bool, message: str) -> None:
    if not debug:
        return
    suki_logger = logging.getLogger("suki")
    previous = suki_logger.level
    suki_logger.setLevel(logging.DEBUG)
    # DEBUG only lasts for this command
    ctx.call_on_close(lambda: suki_logger.setLevel(previous))
    click.echo(message, err=True)


def debug_options(f):
    f = click.option("-r", "--recursive", is_flag=True, help="Accepted for compatibility; has no effect")(f)
    f = click.option("-d", "--debug", is_flag=True, help="Print debugging output to stderr")(f)
    return f


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group(cls=AliasedGroup)
@click.version_option(__version__, prog_name="suki")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML configuration file",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """suki: tag files and find them by tag."""
    try:
        result = ConfigParser().load_config(config_path)
    except SukiError as exc:
        raise click.ClickException(str(exc)) from exc
    logging.basicConfig(level=result.config.get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    for warning in result.warnings:
        logger.info(warning)
    ctx.obj = result.config


# ---------------------------------------------------------------------------
# suki tag / remove
# ---------------------------------------------------------------------------


@cli.command()
@debug_options
@click.argument("filename")
@click.argument("tags", nargs=-1)
@click.pass_context
def tag(ctx: click.Context, filename: str, tags: tuple[str, ...], debug: bool, recursive: bool) -> None:
    """Add FILENAME under each of TAGS."""
    _debug(ctx, debug, f"file: {filename}, tags: {list(tags)}")
    cfg = _config(ctx)
    directory = _directory()
    try:
        db = load(directory, cfg)
        add_file_to_tags(db, filename, tags, dedupe=cfg.dedupe_on_add)
        save(db, directory, cfg)
    except SukiError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@debug_options
@click.argument("filename")
@click.argument("tags", nargs=-1)
@click.pass_context
def remove(ctx: click.Context, filename: str, tags: tuple[str, ...], debug: bool, recursive: bool) -> None:
    """Remove FILENAME from each of TAGS."""
    _debug(ctx, debug, f"file: {filename}, tags: {list(tags)}")
    cfg = _config(ctx)
    directory = _directory()
    try:
        db = load(directory, cfg)
        remove_file_from_tags(db, filename, tags)
        save(db, directory, cfg)
    except SukiError as exc:
        raise click.ClickException(str(exc)) from exc


# ---------------------------------------------------------------------------
# suki search / list
# ---------------------------------------------------------------------------


@cli.command()
@debug_options
@click.argument("tags", nargs=-1)
@click.pass_context
def search(ctx: click.Context, tags: tuple[str, ...], debug: bool, recursive: bool) -> None:
    """Print the files that carry every one of TAGS."""
    _debug(ctx, debug, f"tags: {list(tags)}")
    try:
        db = load(_directory(), _config(ctx))
    except SukiError as exc:
        raise click.ClickException(str(exc)) from exc

    files = intersect_search(db, tags)
    if not files:
        click.echo("nothing found", err=True)
        return
    click.echo(" ".join(files))


@cli.command(name="list")
@click.pass_context
def list_tags(ctx: click.Context) -> None:
    """Print every tag and its files."""
    try:
        db = load(_directory(), _config(ctx))
    except SukiError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(serialize(db), nl=False)


# ---------------------------------------------------------------------------
# suki help / version
# ---------------------------------------------------------------------------


@cli.command(name="help")
@click.pass_context
def help_cmd(ctx: click.Context) -> None:
    """Show this help."""
    click.echo(ctx.parent.get_help())


@cli.command()
def version() -> None:
    """Show the version."""
    click.echo(f"suki version {__version__}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
