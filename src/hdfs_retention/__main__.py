"""CLI entry point for hdfs-retention."""

import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError

from . import __version__
from .adapters.hadoop import HadoopCLIAdapter, locate_hadoop
from .config import Settings, load_settings
from .domain.errors import RetentionError
from .domain.services import RetentionService
from .domain.summary import format_summary

logger = logging.getLogger(__name__)

PROG_NAME = "hdfs-retention"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def collect_overrides(**options: Any) -> dict[str, Any]:
    """Keep only the options the user actually set on the command line."""
    return {
        key: value
        for key, value in options.items()
        if value is not None and value is not False and value != []
    }


def merge_paths(path_opts: tuple[str, ...], paths: tuple[str, ...]) -> list[str]:
    """Combine -p/--path values and positional paths, dropping repeats."""
    return list(dict.fromkeys([*path_opts, *paths]))


def config_as_dict(settings: Settings) -> dict[str, Any]:
    """Plain-data view of the settings, patterns as their source text."""
    data = settings.model_dump()
    for key in ("include", "exclude"):
        pattern = data["retention"][key]
        data["retention"][key] = pattern.pattern if pattern is not None else None
    return data


def settings_or_usage_error(ctx: click.Context, **overrides: Any) -> Settings:
    try:
        return load_settings(ctx.obj["config_path"], **overrides)
    except ValidationError as e:
        raise click.UsageError(str(e), ctx=ctx) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.version_option(__version__, prog_name=PROG_NAME)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """HDFS retention - prune files older than a given age."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.argument("paths", nargs=-1)
@click.option("-d", "--days", type=int, help="Number of days after which to delete files")
@click.option("-H", "--hours", type=int, help="Number of hours after which to delete files")
@click.option("-m", "--mins", type=int, help="Number of minutes after which to delete files")
@click.option(
    "-p", "--path", "path_opts", multiple=True,
    help="Path for which to remove old files (repeatable, default: /tmp)",
)
@click.option("-i", "--include", help="Include regex of files, for optional filtering")
@click.option("-e", "--exclude", help="Exclude regex of files, takes priority over --include")
@click.option(
    "--rm", is_flag=True,
    help="Actually run the delete commands instead of only printing them. "
    "Check the printed list first or you may lose data",
)
@click.option("--skip-trash", is_flag=True, help="Skip the HDFS Trash, reclaims space immediately")
@click.option("-b", "--batch", type=int, help="Delete in groups of N files (max 100)")
@click.option("--hadoop-bin", help="Path to 'hadoop' command if not in $PATH")
@click.option("-t", "--timeout", type=int, help="Abort the run after this many seconds")
@click.pass_context
def prune(
    ctx: click.Context,
    paths: tuple[str, ...],
    days: int | None,
    hours: int | None,
    mins: int | None,
    path_opts: tuple[str, ...],
    include: str | None,
    exclude: str | None,
    rm: bool,
    skip_trash: bool,
    batch: int | None,
    hadoop_bin: str | None,
    timeout: int | None,
) -> None:
    """Print (or with --rm, run) deletes for files older than the given age."""
    settings = settings_or_usage_error(
        ctx,
        retention=collect_overrides(
            days=days,
            hours=hours,
            mins=mins,
            paths=merge_paths(path_opts, paths),
            include=include,
            exclude=exclude,
            batch=batch,
            rm=rm,
            skip_trash=skip_trash,
        ),
        hadoop=collect_overrides(bin=hadoop_bin, timeout=timeout),
    )

    try:
        policy = settings.retention.to_policy()
        hadoop_path = locate_hadoop(settings.hadoop.bin)

        logger.debug(f"rm: {'false' if policy.dry_run else 'true'}")
        logger.debug(f"skipTrash: {'true' if policy.skip_trash else 'false'}")
        logger.debug(f"hadoop path: {hadoop_path}")
        logger.debug(f"paths: {', '.join(policy.roots)}")
        logger.debug(f"max age: {policy.max_age_seconds} seconds")
        logger.debug(f"batch: {policy.batch_size}")

        hadoop = HadoopCLIAdapter(hadoop_path, timeout=settings.hadoop.timeout)
        service = RetentionService(policy, listing=hadoop, deleter=hadoop, echo=click.echo)
        counters = service.run()
    except RetentionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(format_summary(counters, policy, prog=PROG_NAME))


@cli.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the effective configuration as YAML."""
    settings = settings_or_usage_error(ctx)
    click.echo(yaml.dump(config_as_dict(settings), default_flow_style=False, sort_keys=False))


if __name__ == "__main__":
    cli()
