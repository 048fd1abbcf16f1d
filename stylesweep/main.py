"""stylesweep CLI - find React Native styles that are defined but never used."""
import json
from contextlib import nullcontext
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

import typer
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from stylesweep.analyzer.parser import LanguageParser
from stylesweep.analyzer.rule_meta import RULES, SUPPORTED_LOCALES
from stylesweep.analyzer.unused_styles import Finding, analyze_tree
from stylesweep.config import __version__, get_config, is_ci_environment
from stylesweep.utils.logger import setup_logging
from stylesweep.utils.safe_console import SafeConsole

app = typer.Typer(
    name="stylesweep",
    help="Find React Native StyleSheet styles that are defined but never used",
    add_completion=False
)
console = SafeConsole()

OUTPUT_FORMATS = ('table', 'json')


@dataclass
class FileReport:
    """Analysis outcome for one source file."""
    path: Path
    findings: List[Finding] = field(default_factory=list)
    skipped: bool = False


def collect_source_files(paths: Iterable[Path], excluded_dirs: Set[str]) -> Tuple[List[Path], List[Path]]:
    """Expand files and directories into supported source files.

    Directories are walked recursively, skipping ``excluded_dirs``. Files
    given explicitly are kept even inside excluded directories.

    Returns:
        (source files in sorted order without duplicates, paths that do not exist)
    """
    files = []
    missing = []
    seen = set()

    for path in paths:
        if not path.exists():
            missing.append(path)
            continue

        if path.is_file():
            candidates = [path] if path.suffix.lower() in LanguageParser.SUPPORTED_LANGUAGES else []
        else:
            candidates = sorted(
                file_path for file_path in path.rglob('*')
                if file_path.is_file()
                and file_path.suffix.lower() in LanguageParser.SUPPORTED_LANGUAGES
                and not any(part in excluded_dirs for part in file_path.relative_to(path).parts[:-1])
            )

        for file_path in candidates:
            resolved = file_path.resolve()
            if resolved not in seen:
                seen.add(resolved)
                files.append(file_path)

    return files, missing


def analyze_file(file_path: Path) -> FileReport:
    """Run the unused-styles analysis on one file with a fresh analyzer."""
    parser = LanguageParser.from_file_extension(file_path)
    tree = parser.parse_file(file_path) if parser else None
    if tree is None:
        return FileReport(path=file_path, skipped=True)
    return FileReport(path=file_path, findings=analyze_tree(tree))


def _display_path(file_path: Path) -> str:
    try:
        return str(file_path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(file_path)


def _reports_to_json(reports: List[FileReport], locale: str) -> dict:
    return {
        'version': __version__,
        'files_scanned': sum(1 for r in reports if not r.skipped),
        'files_skipped': [_display_path(r.path) for r in reports if r.skipped],
        'findings': [
            {
                'file': _display_path(report.path),
                'line': finding.line,
                'column': finding.column,
                'rule': finding.rule_id,
                'style': finding.name,
                'message': finding.message(locale),
            }
            for report in reports
            for finding in report.findings
        ],
    }


def _print_findings_table(reports: List[FileReport], locale: str):
    table = Table(title="Unused Styles")
    table.add_column("File", style="cyan", overflow="fold")
    table.add_column("Line", style="green", justify="right")
    table.add_column("Style", style="yellow", no_wrap=True)
    table.add_column("Message", style="magenta")

    for report in reports:
        for finding in report.findings:
            table.add_row(
                escape(_display_path(report.path)),
                f"{finding.line}:{finding.column}",
                escape(finding.name),
                escape(finding.message(locale)),
            )

    console.print(table)


@app.command()
def audit(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories to analyze (default: current directory)"),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    locale: Optional[str] = typer.Option(None, "--locale", help="Message locale (en, ja). Overrides STYLESWEEP_LOCALE"),
    fail_on_findings: Optional[bool] = typer.Option(
        None, "--fail-on-findings/--no-fail-on-findings",
        help="Exit with code 1 when unused styles are found (default: on in CI)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Scan files and report StyleSheet.create styles that are never used."""
    setup_logging(verbose)

    try:
        config = get_config()
    except ValueError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
        raise typer.Exit(2)

    if output_format not in OUTPUT_FORMATS:
        console.print(f"[bold red]Error:[/bold red] Unknown format '{escape(output_format)}'. Use one of: {', '.join(OUTPUT_FORMATS)}")
        raise typer.Exit(2)

    locale = (locale or config.locale).lower()
    if locale not in SUPPORTED_LOCALES:
        console.print(f"[bold red]Error:[/bold red] Unsupported locale '{escape(locale)}'. Use one of: {', '.join(SUPPORTED_LOCALES)}")
        raise typer.Exit(2)

    if fail_on_findings is None:
        fail_on_findings = config.fail_on_findings

    files, missing = collect_source_files(paths or [Path(".")], config.excluded_dirs)
    if missing:
        for path in missing:
            console.print(f"[bold red]Error:[/bold red] Path does not exist: {escape(str(path))}")
        raise typer.Exit(1)

    show_progress = output_format == 'table' and console.is_terminal and not is_ci_environment()
    if show_progress:
        progress_ctx = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True
        )
    else:
        progress_ctx = nullcontext()

    reports = []
    with progress_ctx as progress:
        if show_progress:
            task = progress.add_task("Analyzing styles...", total=len(files))
        for file_path in files:
            reports.append(analyze_file(file_path))
            if show_progress:
                progress.advance(task)

    finding_count = sum(len(r.findings) for r in reports)

    if output_format == 'json':
        typer.echo(json.dumps(_reports_to_json(reports, locale), indent=2, ensure_ascii=False))
    else:
        if finding_count:
            _print_findings_table(reports, locale)
        else:
            console.print("[bold green]✓ No unused styles found![/bold green]")

        skipped = [r for r in reports if r.skipped]
        for report in skipped:
            console.print(f"[yellow]⚠ Skipped unreadable file:[/yellow] {escape(_display_path(report.path))}")

        console.print("\n[bold yellow]Summary:[/bold yellow]")
        console.print(f"  Files scanned: {len(reports) - len(skipped)}")
        console.print(f"  Unused styles: {finding_count}")

    if finding_count and fail_on_findings:
        raise typer.Exit(1)


@app.command()
def rules():
    """List the rules stylesweep applies."""
    table = Table(title="Rules", show_header=True, header_style="bold cyan")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Type", style="yellow", no_wrap=True)
    table.add_column("Recommended", style="green")
    table.add_column("Fixable")
    table.add_column("Description", overflow="fold")

    for meta in RULES.values():
        table.add_row(
            meta.rule_id,
            meta.type,
            meta.severity if meta.recommended else "off",
            "yes" if meta.fixable else "no",
            meta.description,
        )

    console.print(table)


@app.command()
def version():
    """Print the stylesweep version."""
    typer.echo(f"stylesweep {__version__}")


@app.callback()
def main():
    """stylesweep - unused React Native style detection."""
    pass


if __name__ == "__main__":
    app()
