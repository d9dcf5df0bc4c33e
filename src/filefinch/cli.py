"""Command line interface for the FileFinch project."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Any

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from filefinch.config import ConfigError, ConfigManager, FileFinchConfig, resolve_with_precedence
from filefinch.detection import TypeDetector, analyze_data_format
from filefinch.ingestion import DirectoryScanner, TriagePipeline, TriageResult

console = Console()
err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    """Route library logging through a Rich handler on stderr.

    Args:
        level: Logging level name such as ``WARNING`` or ``DEBUG``.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, show_time=False)],
        force=True,
    )


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """
    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, mode: str, quiet: bool, summary_only: bool) -> None:
    """Conditionally print CLI output according to quiet/summary settings.

    Args:
        message: Renderable or string to emit.
        mode: Output mode identifier (`detail`, `summary`, `warning`, or `error`).
        quiet: Whether quiet mode is active.
        summary_only: Whether only summary lines should be emitted.
    """
    if quiet and mode != "error":
        return

    if summary_only and mode not in {"summary", "warning", "error"}:
        return

    console.print(message)


def _format_summary_line(command: str, root: Path | str, metrics: dict[str, Any]) -> str:
    """Return a consistent summary line for CLI commands."""
    parts = ", ".join(f"{key}={value}" for key, value in metrics.items())
    return f"[green]{command} summary for {root}: {parts}.[/green]"


def _load_config(verbose: bool = False) -> FileFinchConfig:
    """Load the effective configuration and apply its logging level.

    Raises:
        ConfigError: If the configuration cannot be loaded.
    """
    manager = ConfigManager()
    config = manager.load()
    _configure_logging("DEBUG" if verbose else config.logging.level)
    return config


def _resolve_output_modes(
    ctx: click.Context,
    config: FileFinchConfig,
    *,
    quiet: bool,
    summary_mode: bool,
    json_output: bool,
) -> tuple[bool, bool]:
    """Combine explicit flags with configured defaults.

    Returns:
        tuple[bool, bool]: Effective ``(quiet, summary_only)`` flags.

    Raises:
        click.ClickException: If incompatible modes are requested.
    """
    explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
    explicit_summary = ctx.get_parameter_source("summary_mode") == ParameterSource.COMMANDLINE

    quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
    summary_only = summary_mode if explicit_summary else config.cli.summary_default

    if json_output:
        if explicit_quiet and quiet_enabled:
            raise click.ClickException("--json cannot be combined with --quiet.")
        if explicit_summary and summary_only:
            raise click.ClickException("--json cannot be combined with --summary.")
        return False, False

    if quiet_enabled and summary_only:
        raise click.ClickException(
            "Quiet and summary modes cannot both be enabled. Adjust CLI defaults or flags."
        )
    return quiet_enabled, summary_only


def _emit_triage(
    command: str,
    source: Path,
    result: TriageResult,
    *,
    json_output: bool,
    quiet: bool,
    summary_only: bool,
) -> None:
    """Render a triage result as a table plus summary, or as JSON."""
    distribution = result.distribution()
    if json_output:
        console.print_json(
            data={
                "context": {"source": source.as_posix()},
                "counts": {
                    "entries": result.total_entries,
                    "bytes": result.total_bytes,
                    "errors": len(result.errors),
                },
                "distribution": distribution,
                "entries": [record.model_dump(mode="json") for record in result.records],
                "errors": list(result.errors),
            }
        )
        return

    table = Table(title=f"{command} results for {source}")
    table.add_column("#", justify="right")
    table.add_column("Entry", overflow="fold")
    table.add_column("Size", justify="right")
    table.add_column("Type")
    for index, record in enumerate(result.records, start=1):
        size = f"{record.size_bytes}" + (" (sampled)" if record.sampled else "")
        table.add_row(str(index), record.filename, size, str(record.file_type))
    _emit_message(table, mode="detail", quiet=quiet, summary_only=summary_only)

    if result.errors:
        _emit_message(
            "[red]Errors encountered:[/red]", mode="error", quiet=quiet, summary_only=summary_only
        )
        for entry in result.errors:
            _emit_message(f"  - {entry}", mode="error", quiet=quiet, summary_only=summary_only)

    if distribution:
        _emit_message(
            "[cyan]File type distribution:[/cyan]",
            mode="detail",
            quiet=quiet,
            summary_only=summary_only,
        )
        for label, count in distribution.items():
            _emit_message(f"  {label}: {count}", mode="detail", quiet=quiet, summary_only=summary_only)

    _emit_message(
        _format_summary_line(
            command,
            source,
            {
                "entries": result.total_entries,
                "bytes": result.total_bytes,
                "errors": len(result.errors),
            },
        ),
        mode="summary",
        quiet=quiet,
        summary_only=summary_only,
    )


def _build_pipeline(config: FileFinchConfig, *, recursive: bool = False) -> TriagePipeline:
    processing = config.processing
    max_size_bytes = None
    if processing.max_file_size_mb > 0:
        max_size_bytes = processing.max_file_size_mb * 1024 * 1024
    scanner = DirectoryScanner(
        recursive=recursive or processing.recurse_directories,
        include_hidden=processing.process_hidden_files,
        follow_symlinks=processing.follow_symlinks,
        max_size_bytes=max_size_bytes,
    )
    detector = TypeDetector(use_extension=config.detection.use_extension_fallback)
    return TriagePipeline(scanner=scanner, detector=detector, processing=processing)


def _assign_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign ``value`` at the dotted ``path`` inside ``target``.

    Raises:
        ConfigError: If a non-mapping value is encountered along the path.
    """
    node = target
    for segment in path[:-1]:
        existing = node.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise ConfigError(
                f"Cannot assign into '{segment}' because it is not a mapping in the config file."
            )
        node = existing
    node[path[-1]] = value


_output_options = [
    click.option("--json", "json_output", is_flag=True, help="Emit results as JSON."),
    click.option("--summary", "summary_mode", is_flag=True, help="Only emit summary lines."),
    click.option("--quiet", is_flag=True, help="Suppress non-error output."),
    click.option("-v", "--verbose", is_flag=True, help="Log detection decisions at DEBUG level."),
]


def output_options(func):
    """Attach the shared output-mode options to a command."""
    for option in reversed(_output_options):
        func = option(func)
    return func


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="filefinch")
def cli() -> None:
    """FileFinch identifies tabular and geospatial file formats from their bytes."""


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--json", "json_output", is_flag=True, help="Emit detections as JSON.")
@click.option(
    "--no-extension",
    is_flag=True,
    help="Classify from content only, ignoring filename extensions.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log detection decisions at DEBUG level.")
def detect(files: tuple[Path, ...], json_output: bool, no_extension: bool, verbose: bool) -> None:
    """Detect the format of each FILE.

    Args:
        files: Paths of the files to classify.
        json_output: If True, emit a JSON list instead of a table.
        no_extension: If True, disable the extension fallback.
        verbose: If True, log at DEBUG level.
    """
    try:
        config = _load_config(verbose)
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return

    use_extension = config.detection.use_extension_fallback and not no_extension
    detector = TypeDetector(use_extension=use_extension)
    pipeline = _build_pipeline(config)

    rows: list[dict[str, str]] = []
    for path in files:
        try:
            limit = pipeline.limit_for(path.stat().st_size)
            file_type = detector.detect(path, sample_limit=limit)
        except OSError as exc:
            _handle_cli_error(
                f"Unable to read {path}: {exc}",
                code="read_error",
                json_output=json_output,
                original=exc,
            )
            return
        rows.append({"path": path.as_posix(), "type": file_type.value, "label": str(file_type)})

    if json_output:
        console.print_json(data=rows)
        return

    table = Table(title="Detected file types")
    table.add_column("File", overflow="fold")
    table.add_column("Type")
    for row in rows:
        table.add_row(row["path"], row["label"])
    console.print(table)


@cli.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("-r", "--recursive", is_flag=True, help="Include all subdirectories.")
@output_options
@click.pass_context
def scan(
    ctx: click.Context,
    path: Path,
    recursive: bool,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Triage every file found under PATH.

    Args:
        ctx: Click context used for parameter source inspection.
        path: Directory (or single file) to triage.
        recursive: Whether to include subdirectories.
        json_output: If True, emit JSON describing every entry.
        summary_mode: When True, limit output to summary lines and warnings.
        quiet: When True, suppress non-error CLI output entirely.
        verbose: If True, log at DEBUG level.
    """
    try:
        config = _load_config(verbose)
        quiet_enabled, summary_only = _resolve_output_modes(
            ctx, config, quiet=quiet, summary_mode=summary_mode, json_output=json_output
        )
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return
    except click.ClickException as exc:
        _handle_cli_error(exc.message, code="cli_error", json_output=json_output, original=exc)
        return

    source = path.expanduser().resolve()
    result = _build_pipeline(config, recursive=recursive).run([source])
    _emit_triage(
        "Scan",
        source,
        result,
        json_output=json_output,
        quiet=quiet_enabled,
        summary_only=summary_only,
    )


@cli.command()
@click.argument("zipfile", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@output_options
@click.pass_context
def archive(
    ctx: click.Context,
    zipfile: Path,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Triage every member of the zip archive ZIPFILE.

    Args:
        ctx: Click context used for parameter source inspection.
        zipfile: Archive whose members are classified one by one.
        json_output: If True, emit JSON describing every entry.
        summary_mode: When True, limit output to summary lines and warnings.
        quiet: When True, suppress non-error CLI output entirely.
        verbose: If True, log at DEBUG level.
    """
    try:
        config = _load_config(verbose)
        quiet_enabled, summary_only = _resolve_output_modes(
            ctx, config, quiet=quiet, summary_mode=summary_mode, json_output=json_output
        )
    except ConfigError as exc:
        _handle_cli_error(str(exc), code="config_error", json_output=json_output, original=exc)
        return
    except click.ClickException as exc:
        _handle_cli_error(exc.message, code="cli_error", json_output=json_output, original=exc)
        return

    source = zipfile.expanduser().resolve()
    result = _build_pipeline(config).run_archive(source)
    _emit_triage(
        "Archive",
        source,
        result,
        json_output=json_output,
        quiet=quiet_enabled,
        summary_only=summary_only,
    )


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def analyze(file: Path) -> None:
    """Print a structural report of FILE's leading bytes."""
    try:
        data = file.read_bytes()
    except OSError as exc:
        raise click.ClickException(f"Unable to read {file}: {exc}") from exc
    analyze_data_format(data, console=console)


@cli.group()
def config() -> None:
    """Manage FileFinch configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        effective = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path such as ``processing.max_file_size_mb``.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        file_data = manager.load_file_overrides()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    before = manager.read_text().splitlines()
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'logging.level'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        _assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=FileFinchConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()

    # The timestamp line always changes; ignore it when deciding whether anything moved.
    before_body = [line for line in before if not line.startswith("# Last updated:")]
    after_body = [line for line in after if not line.startswith("# Last updated:")]
    diff = list(
        difflib.unified_diff(
            before_body,
            after_body,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )

    if not diff:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an interactive editor session.

    Raises:
        click.ClickException: If edited content is invalid or cannot be saved.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None:
        console.print("[yellow]Edit cancelled; no changes applied.[/yellow]")
        return

    if edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        resolve_with_precedence(defaults=FileFinchConfig(), file_overrides=parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
