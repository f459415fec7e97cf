"""CLI interface for fileark."""

import logging
import sys
from collections import Counter
from collections.abc import Callable
from pathlib import Path

import click

from fileark.config import Config
from fileark.copier import Copier, CopyJob, DestinationSetupError
from fileark.manifest import ManifestWriteError, load_manifest
from fileark.models import CopyOptions, FileRecord, ScanRule
from fileark.rules import (
    CATEGORY_PRESETS,
    RuleError,
    build_scan_rule,
    default_categories,
    find_preset,
    parse_extension_list,
    parse_size,
)
from fileark.scanner import Scanner
from fileark.scanner.stats import format_bytes, format_duration


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log engine activity")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config()


def rule_options(func: Callable) -> Callable:
    """Options shared by every command that builds a ScanRule."""
    options = [
        click.option(
            "-c",
            "--category",
            "categories",
            multiple=True,
            help="Category to collect (repeatable). Defaults to the enabled presets.",
        ),
        click.option(
            "--min-size",
            "min_sizes",
            multiple=True,
            metavar="CATEGORY=SIZE",
            help="Override a category's minimum file size, e.g. Images=100KB",
        ),
        click.option("--ext", "custom_ext", default="", help="Extra extensions, comma separated"),
        click.option(
            "--skip-ext",
            "skip_exts",
            multiple=True,
            help="Extension to leave out of the selected categories (repeatable)",
        ),
        click.option("--exclude", "excludes", multiple=True, help="Extra folder name to skip"),
        click.option("--no-exclude-temp", is_flag=True, help="Scan temp and cache folders"),
        click.option("--no-exclude-system", is_flag=True, help="Scan system folders"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_rule(
    categories: tuple[str, ...],
    min_sizes: tuple[str, ...],
    custom_ext: str,
    skip_exts: tuple[str, ...],
    excludes: tuple[str, ...],
    no_exclude_temp: bool,
    no_exclude_system: bool,
) -> ScanRule:
    if categories:
        presets = []
        for name in categories:
            preset = find_preset(name)
            if preset is None:
                raise click.BadParameter(f"Unknown category: {name}", param_hint="--category")
            presets.append(preset)
    else:
        presets = default_categories()

    overrides: dict[str, int] = {}
    for item in min_sizes:
        name, sep, size = item.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected CATEGORY=SIZE, got {item!r}", param_hint="--min-size")
        try:
            overrides[name.strip()] = parse_size(size)
        except RuleError as e:
            raise click.BadParameter(str(e), param_hint="--min-size") from e

    try:
        return build_scan_rule(
            presets,
            min_sizes=overrides,
            custom_extensions=parse_extension_list(custom_ext),
            exclude_temp_cache=not no_exclude_temp,
            exclude_system=not no_exclude_system,
            extra_excludes=excludes,
            excluded_extensions=parse_extension_list(",".join(skip_exts)),
        )
    except RuleError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _run_scan(config: Config, source_path: Path, rule: ScanRule) -> list[FileRecord]:
    scanner = Scanner(max_path_length=config.scanner.max_path_length)
    records = scanner.scan(source_path, rule)
    stats = scanner.stats
    click.echo(
        f"Found {stats.files_matched:,} files ({format_bytes(stats.total_bytes)}) in "
        f"{stats.directories_scanned:,} directories ({format_duration(stats.elapsed_seconds)})"
    )
    return records


def _print_category_summary(records: list[FileRecord]) -> None:
    counts = Counter(record.category for record in records)
    sizes: Counter[str] = Counter()
    for record in records:
        sizes[record.category] += record.size

    for category, count in sorted(counts.items()):
        click.echo(f"  {category:<12} {count:>8,} files {format_bytes(sizes[category]):>12}")


@cli.command()
@click.argument("source_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@rule_options
@click.option("--list", "list_files", is_flag=True, help="Print every matching file")
@click.pass_context
def scan(
    ctx: click.Context,
    source_path: Path,
    categories: tuple[str, ...],
    min_sizes: tuple[str, ...],
    custom_ext: str,
    skip_exts: tuple[str, ...],
    excludes: tuple[str, ...],
    no_exclude_temp: bool,
    no_exclude_system: bool,
    list_files: bool,
) -> None:
    """List the files a copy would pick up."""
    config: Config = ctx.obj["config"]
    rule = _build_rule(
        categories,
        min_sizes,
        custom_ext,
        skip_exts,
        excludes,
        no_exclude_temp,
        no_exclude_system,
    )

    records = _run_scan(config, source_path, rule)
    if list_files:
        for record in records:
            click.echo(f"{record.category}\t{record.size}\t{record.path}")
    _print_category_summary(records)


@cli.command("copy")
@click.argument("source_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("dest_path", type=click.Path(file_okay=False, path_type=Path))
@rule_options
@click.option("--subfolder-by-ext", is_flag=True, help="Group files into per-extension folders")
@click.option("--write-origin", is_flag=True, help="Write a .origin.txt next to each copy")
@click.pass_context
def copy_files(
    ctx: click.Context,
    source_path: Path,
    dest_path: Path,
    categories: tuple[str, ...],
    min_sizes: tuple[str, ...],
    custom_ext: str,
    skip_exts: tuple[str, ...],
    excludes: tuple[str, ...],
    no_exclude_temp: bool,
    no_exclude_system: bool,
    subfolder_by_ext: bool,
    write_origin: bool,
) -> None:
    """Scan SOURCE_PATH and copy matches into category folders under DEST_PATH."""
    config: Config = ctx.obj["config"]
    rule = _build_rule(
        categories,
        min_sizes,
        custom_ext,
        skip_exts,
        excludes,
        no_exclude_temp,
        no_exclude_system,
    )

    records = _run_scan(config, source_path, rule)
    if not records:
        click.echo("No matching files found.")
        return

    copier = Copier(
        progress_batch_size=config.copier.progress_batch_size,
        manifest_name=config.copier.manifest_name,
        sidecar_suffix=config.copier.sidecar_suffix,
    )
    options = CopyOptions(
        group_by_extension_subfolder=subfolder_by_ext,
        write_origin_sidecar=write_origin,
    )
    job = CopyJob(copier, records, dest_path, options).start()

    with click.progressbar(
        length=len(records),
        label="Copying",
        item_show_func=lambda item: item,
    ) as bar:
        shown = 0
        while True:
            try:
                for event in job.events():
                    bar.update(event.current - shown, event.filename)
                    shown = event.current
                break
            except KeyboardInterrupt:
                job.cancel()
                click.echo("\nStopping after the current file...", err=True)

    try:
        result = job.result()
    except (DestinationSetupError, ManifestWriteError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo()
    if result.cancelled:
        click.echo(f"Cancelled. {result.copied:,} files copied.")
    else:
        click.echo(f"Done! {result.copied:,} files copied.")
    if result.errors:
        click.echo(f"{result.errors:,} files failed, see {dest_path / config.copier.manifest_name}")

    if result.cancelled:
        sys.exit(130)
    if result.errors:
        sys.exit(1)


@cli.command("categories")
def list_categories() -> None:
    """Show the built-in file categories."""
    for preset in CATEGORY_PRESETS:
        marker = "*" if preset.enabled_by_default else " "
        click.echo(
            f"{marker} {preset.name:<10} min {format_bytes(preset.default_min_size):>9}  "
            + ", ".join(preset.extensions)
        )
    click.echo("\n* enabled by default")


@cli.command("manifest")
@click.argument("dest_path", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--errors", "show_errors", is_flag=True, help="List files that failed to copy")
@click.pass_context
def show_manifest(ctx: click.Context, dest_path: Path, show_errors: bool) -> None:
    """Summarize the manifest left by a previous copy."""
    config: Config = ctx.obj["config"]

    try:
        data = load_manifest(dest_path, config.copier.manifest_name)
    except FileNotFoundError:
        click.echo(f"No manifest found in {dest_path}. Run 'fileark copy' first.", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    status = "cancelled" if data.cancelled else "completed"
    click.echo(f"Created:    {data.created}")
    click.echo(f"Status:     {status}")
    click.echo(f"Files:      {data.copied_files:,} of {data.total_files:,} copied")
    click.echo(f"Errors:     {data.errors:,}")
    click.echo(f"Categories: {', '.join(data.categories) or '-'}")

    if show_errors:
        for entry in data.files:
            if not entry.succeeded:
                click.echo(f"  {entry.original}: {entry.error}")


def main() -> None:
    """Entry point for the CLI."""
    cli(standalone_mode=True)  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
