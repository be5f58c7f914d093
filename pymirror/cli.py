"""CLI interface for pymirror."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from .cli_progress import SyncProgressDisplay, create_line_tracker
from .exceptions import PyMirrorError
from .output import OutputFormatter
from .sync import (
    DEFAULT_CONFIG_FILE_NAME,
    SyncEngine,
    SyncMethod,
    SyncPair,
    load_sync_pairs,
)
from .utils import format_size

logger = logging.getLogger(__name__)


def _parse_method(ctx: Any, param: Any, value: Optional[str]) -> Optional[SyncMethod]:
    if value is None:
        return None
    try:
        return SyncMethod.from_string(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _resolve_pairs(
    source: Optional[str],
    destination: Optional[str],
    method: Optional[SyncMethod],
    config_path: Optional[str],
) -> list[SyncPair]:
    """Build the sync pairs from arguments or a configuration file.

    Explicit SOURCE and DESTINATION arguments win; otherwise the file given
    with --config is used, falling back to Configs.xml in the working
    directory. --method overrides the method from the configuration.
    """
    if source is not None and destination is not None:
        return [
            SyncPair(
                source=Path(source),
                destination=Path(destination),
                method=method or SyncMethod.SINGLE,
            )
        ]
    if source is not None or destination is not None:
        raise click.UsageError("Both SOURCE and DESTINATION are required")

    config_file = Path(config_path) if config_path else Path(DEFAULT_CONFIG_FILE_NAME)
    if config_path is None and not config_file.is_file():
        raise click.UsageError(
            f"No SOURCE/DESTINATION given and {DEFAULT_CONFIG_FILE_NAME} not found"
        )

    pairs = load_sync_pairs(config_file)
    logger.debug(f"Using configuration {config_file} ({len(pairs)} pair(s))")
    if method is not None:
        for pair in pairs:
            pair.method = method
    return pairs


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="pymirror")
@click.pass_context
def main(ctx: Any, quiet: bool, json: bool, verbose: bool) -> None:
    """pymirror - keep a backup directory in sync with a master directory."""
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)
    ctx.obj["verbose"] = verbose

    # Configure logging based on verbose flag
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pymirror").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


_pair_arguments = [
    click.argument("source", type=str, required=False, default=None),
    click.argument("destination", type=str, required=False, default=None),
    click.option(
        "--method",
        "-m",
        callback=_parse_method,
        help="Sync method: single (1, s) or mirror (2, m)",
    ),
    click.option(
        "--config",
        "-c",
        "config_path",
        type=click.Path(dir_okay=False),
        help=f"XML or JSON configuration file (default: {DEFAULT_CONFIG_FILE_NAME})",
    ),
]


def pair_options(func: Any) -> Any:
    for decorator in reversed(_pair_arguments):
        func = decorator(func)
    return func


@main.command()
@pair_options
@click.option("--list", "-l", "list_files", is_flag=True, help="List every file")
@click.pass_context
def plan(
    ctx: Any,
    source: Optional[str],
    destination: Optional[str],
    method: Optional[SyncMethod],
    config_path: Optional[str],
    list_files: bool,
) -> None:
    """Show what a sync would copy and delete, without changing anything.

    Examples:
        pymirror plan /data/master /mnt/backup
        pymirror plan /data/master /mnt/backup -m mirror --list
        pymirror plan --config Configs.xml
    """
    out: OutputFormatter = ctx.obj["out"]

    try:
        pairs = _resolve_pairs(source, destination, method, config_path)
        results = []
        for pair in pairs:
            engine = SyncEngine.from_pair(pair)
            out.info(f"Sync pair: {pair}")

            if not engine.is_source_valid:
                out.warning(f"Source repository is not valid: {pair.source}")
            if not engine.is_destination_valid:
                out.warning(f"Destination repository is not valid: {pair.destination}")

            sync_plan = engine.plan()
            files_to_delete = (
                sync_plan.files_to_delete if pair.method.allows_delete else []
            )
            enough_space = engine.is_destination_valid and engine.has_enough_space(
                sync_plan.total_copy_size
            )

            out.info(f"  Copy: {len(sync_plan.files_to_copy)} file(s)")
            if list_files:
                for record in sync_plan.files_to_copy:
                    out.info(f"    + {record.relative_path}")
            if pair.method.allows_delete:
                out.info(f"  Delete: {len(files_to_delete)} file(s)")
                if list_files:
                    for record in files_to_delete:
                        out.info(f"    - {record.relative_path}")
            out.info(f"  Total size: {format_size(sync_plan.total_copy_size)}")
            if engine.is_destination_valid and not enough_space:
                out.warning("There is not enough free space on destination disk!")

            results.append(
                {
                    "source": str(pair.source),
                    "destination": str(pair.destination),
                    "method": pair.method.value,
                    "copy": [r.relative_path for r in sync_plan.files_to_copy],
                    "delete": [r.relative_path for r in files_to_delete],
                    "total_size": sync_plan.total_copy_size,
                    "enough_space": enough_space,
                }
            )

        if out.json_output:
            out.output_json(results)
    except PyMirrorError as e:
        out.error(str(e))
        ctx.exit(1)


@main.command()
@pair_options
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option("--no-progress", is_flag=True, help="Disable progress bars")
@click.pass_context
def sync(
    ctx: Any,
    source: Optional[str],
    destination: Optional[str],
    method: Optional[SyncMethod],
    config_path: Optional[str],
    yes: bool,
    no_progress: bool,
) -> None:
    """Copy new and newer files from SOURCE to DESTINATION.

    With the mirror method, files that only exist in DESTINATION are deleted
    and empty folders left behind are removed.

    Without SOURCE and DESTINATION, the pair is read from --config or from
    Configs.xml in the current directory.

    Examples:
        pymirror sync /data/master /mnt/backup
        pymirror sync /data/master /mnt/backup --method mirror --yes
        pymirror sync --config pairs.json
    """
    out: OutputFormatter = ctx.obj["out"]
    failed = False
    results = []

    try:
        pairs = _resolve_pairs(source, destination, method, config_path)
        for pair in pairs:
            engine = SyncEngine.from_pair(pair)
            out.info(f"Working: {pair}")

            if not engine.is_source_valid:
                out.error(f"Master repository is not valid: {pair.source}")
                failed = True
                continue
            if not engine.is_destination_valid:
                out.error(f"Backup repository is not valid: {pair.destination}")
                failed = True
                continue

            sync_plan = engine.plan()
            copy_count = len(sync_plan.files_to_copy)
            delete_count = (
                len(sync_plan.files_to_delete) if pair.method.allows_delete else 0
            )

            if copy_count == 0 and delete_count == 0:
                out.success("Backup repository is up to date!")
                continue

            if copy_count:
                out.info(f"{copy_count} Files will be copied!")
            if delete_count:
                out.info(f"{delete_count} Files will be deleted!")

            if not yes and not click.confirm(
                "Do you want to continue?", default=False, err=True
            ):
                out.warning("Sync cancelled")
                continue

            if no_progress or out.quiet or out.json_output:
                engine.tracker = create_line_tracker(out)
                outcome = engine.run()
            else:
                with SyncProgressDisplay(copy_count, delete_count) as display:
                    engine.tracker = display.create_tracker()
                    outcome = engine.run()

            if outcome.success:
                out.success("Success!")
                out.info(outcome.message)
            else:
                failed = True
                out.error("Sync finished with errors")
                out.info(outcome.message)

            results.append(
                {
                    "source": str(pair.source),
                    "destination": str(pair.destination),
                    "method": pair.method.value,
                    "success": outcome.success,
                    "copied": outcome.copied,
                    "deleted": outcome.deleted,
                    "errors": outcome.errors,
                    "message": outcome.message,
                }
            )
    except KeyboardInterrupt:
        out.warning("\nSync cancelled by user")
        ctx.exit(130)
    except PyMirrorError as e:
        out.error(str(e))
        ctx.exit(1)

    if out.json_output:
        out.output_json(results)

    if failed:
        ctx.exit(1)


if __name__ == "__main__":
    main()
