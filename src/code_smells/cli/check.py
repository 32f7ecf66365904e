"""The check command: scan a project and report threshold breaches."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..checks import CheckType, run_checks
from ..detect import detect_languages, parse_language_list
from ..exceptions import CodeSmellsError, InvalidPathError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from ..scanning import LANGUAGES
from . import app
from ._common import OutputFormat, err_console, resolve_settings, severity_filter


@app.command()
def check(
    directory: Path = typer.Argument(
        Path("."),
        help="Project directory to check",
        show_default=True,
    ),
    check_type: CheckType = typer.Option(
        CheckType.ALL,
        "--check",
        "-c",
        help="Which check to run",
        case_sensitive=False,
    ),
    lang: Optional[str] = typer.Option(
        None,
        "--lang",
        "-l",
        help="Comma-separated languages (default: auto-detect from marker files)",
    ),
    fmt: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    errors_only: bool = typer.Option(False, "--errors", "-e", help="Only show errors"),
    warnings_only: bool = typer.Option(False, "--warnings", "-w", help="Only show warnings"),
    file_warn: Optional[int] = typer.Option(None, "--file-warn", min=0, help="File length warning limit"),
    file_error: Optional[int] = typer.Option(None, "--file-error", min=0, help="File length error limit"),
    func_warn: Optional[int] = typer.Option(None, "--func-warn", min=0, help="Function length warning limit"),
    func_error: Optional[int] = typer.Option(None, "--func-error", min=0, help="Function length error limit"),
    nest_warn: Optional[int] = typer.Option(None, "--nest-warn", min=0, help="Nesting depth warning limit"),
    nest_error: Optional[int] = typer.Option(None, "--nest-error", min=0, help="Nesting depth error limit"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file (TOML)",
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        help="Check files on this many threads",
        min=1,
        max=64,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Check a project for long files, long functions and deep nesting.

    Exit status is 0 with no issues, 1 with warnings only and 2 when any
    error was found.

    [bold cyan]Examples:[/bold cyan]

      code-smells

      code-smells path/to/project --lang python,rust

      code-smells --check functions --func-error 40 --format json
    """
    from .. import __version__

    if version:
        typer.echo(f"code-smells {__version__}")
        raise typer.Exit(0)

    if errors_only and warnings_only:
        err_console.print("[red]Error:[/red] --errors and --warnings cannot be combined")
        raise typer.Exit(1)

    try:
        logger = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    except OSError as e:
        err_console.print(f"[red]Error:[/red] Cannot open log file: {escape(str(e))}")
        raise typer.Exit(1)

    try:
        project_dir = directory.resolve()
        if not project_dir.is_dir():
            raise InvalidPathError(directory, "not a directory")

        settings = resolve_settings(
            project_dir,
            config=config,
            workers=workers,
            verbose=verbose,
            quiet=quiet,
        )
        if settings.verbosity != "normal" and not (verbose or quiet):
            # Verbosity came from a config file or the environment
            logger = setup_logging(
                verbose=settings.verbosity == "verbose",
                quiet=settings.verbosity == "quiet",
                log_file=log_file,
            )

        if lang:
            languages = parse_language_list(lang)
        else:
            languages = detect_languages(project_dir)

        if not languages:
            err_console.print(f"[red]No supported languages detected in {escape(str(project_dir))}[/red]")
            err_console.print(f"Supported: {', '.join(LANGUAGES)}")
            raise typer.Exit(1)

        report = run_checks(
            project_dir,
            languages,
            settings,
            check_type,
            threshold_overrides={
                "file_warn": file_warn,
                "file_error": file_error,
                "function_warn": func_warn,
                "function_error": func_error,
                "nesting_warn": nest_warn,
                "nesting_error": nest_error,
            },
        )

        get_formatter(fmt.value).render(report, severity_filter(errors_only, warnings_only))

    except typer.Exit:
        raise

    except CodeSmellsError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Check interrupted by user")
        err_console.print("\n[yellow]Check interrupted[/yellow]")
        raise typer.Exit(130)

    raise typer.Exit(report.exit_code())
