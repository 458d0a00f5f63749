"""
Doc-Drift CLI

Command-line interface for the drift detection engine.
Provides commands for comparing two enriched documents, inspecting their
section alignment, merging them and validating a document.

Commands:
    docdrift compare <existing> <incoming>    Analyze drift between documents
    docdrift sections <existing> <incoming>   Show how sections line up
    docdrift merge <existing> <incoming>      Merge two documents
    docdrift validate <document>              Check a document's content rules
    docdrift text-diff <existing> <incoming>  Line diff of one text field

Usage:
    $ docdrift compare stored.json enriched.json
    $ docdrift merge stored.json enriched.json --strategy prefer-new -o out.json
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from pydantic import ValidationError
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from docdrift import __version__
from docdrift.config import LogLevel, load_settings
from docdrift.diff import detailed_diff, diff_sections
from docdrift.drift import analyze
from docdrift.errors import DocumentFormatError
from docdrift.merge import merge as merge_documents
from docdrift.models import (
    ConflictResolution,
    DriftAnalysis,
    EnrichedDocument,
    Recommendation,
    Significance,
)
from docdrift.serialization import (
    analysis_to_dict,
    document_to_dict,
    dump_document,
    load_document,
)
from docdrift.validation import validate_document

# Initialize Typer app and Rich console
app = typer.Typer(
    name="docdrift",
    help="Doc-Drift: drift detection and resolution for enriched documentation",
    add_completion=False,
)
console = Console()

logger = logging.getLogger("docdrift")

TEXT_FIELDS = ("title", "summary", "description", "purpose")


def _document_argument(help_text: str):
    return typer.Argument(
        ...,
        help=help_text,
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    )


def _load(path: Path) -> EnrichedDocument:
    """Load a document or exit with an error message."""
    try:
        return load_document(path)
    except (DocumentFormatError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def compare(
    existing: Path = _document_argument("Stored document (JSON)"),
    incoming: Path = _document_argument("Newly enriched document (JSON)"),
    ignore_minor: Optional[bool] = typer.Option(
        None,
        "--ignore-minor/--keep-minor",
        help="Drop low-significance changes (default from DOCDRIFT_IGNORE_MINOR_CHANGES)",
    ),
    focus: Optional[list[str]] = typer.Option(
        None,
        "--focus",
        "-f",
        help="Metadata field to compare instead of the defaults (repeatable)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the analysis as JSON",
    ),
) -> None:
    """
    Analyze drift between a stored document and a newly enriched one.

    Prints every detected change with its significance, the confidence
    score and the recommended next action.
    """
    settings = load_settings()
    options = settings.analysis_options()

    overrides = {}
    if ignore_minor is not None:
        overrides["ignore_minor_changes"] = ignore_minor
    if focus:
        overrides["focus_areas"] = tuple(focus)

    old_doc = _load(existing)
    new_doc = _load(incoming)

    analysis = analyze(old_doc, new_doc, options, **overrides)
    logger.debug("Compared %s with %s", existing, incoming)

    if as_json:
        typer.echo(json.dumps(analysis_to_dict(analysis), indent=2))
        return

    _print_changes_table(analysis)
    _print_analysis_summary(analysis)


@app.command()
def sections(
    existing: Path = _document_argument("Stored document (JSON)"),
    incoming: Path = _document_argument("Newly enriched document (JSON)"),
) -> None:
    """
    Show how the sections of two documents line up by title.
    """
    old_doc = _load(existing)
    new_doc = _load(incoming)
    diff = diff_sections(old_doc.sections, new_doc.sections)

    table = Table(title="Section Alignment", box=box.ROUNDED)
    table.add_column("Section", style="cyan", no_wrap=True)
    table.add_column("Status", style="bold", no_wrap=True)
    table.add_column("Similarity", justify="right")

    for section in diff.unchanged:
        table.add_row(section.title, "[dim]unchanged[/dim]", "1.00")
    for modification in diff.modified:
        table.add_row(
            modification.title,
            "[yellow]modified[/yellow]",
            f"{modification.similarity:.2f}",
        )
    for section in diff.added:
        table.add_row(section.title, "[green]added[/green]", "-")
    for section in diff.removed:
        table.add_row(section.title, "[red]removed[/red]", "-")

    console.print(table)


@app.command()
def merge(
    existing: Path = _document_argument("Stored document (JSON)"),
    incoming: Path = _document_argument("Newly enriched document (JSON)"),
    strategy: Optional[ConflictResolution] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Conflict resolution (default from DOCDRIFT_MERGE_STRATEGY)",
        case_sensitive=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the merged document here instead of printing it",
        dir_okay=False,
    ),
) -> None:
    """
    Merge a stored document with a newly enriched one.

    Removed sections are dropped and the incoming side wins conflicts
    unless --strategy prefer-existing is given.
    """
    settings = load_settings()
    chosen = strategy or settings.merge_strategy

    merged = merge_documents(_load(existing), _load(incoming), chosen)
    logger.info("Merged documents with strategy %s", chosen.value)

    if output is None:
        typer.echo(json.dumps(document_to_dict(merged), indent=2))
        return

    dump_document(merged, output)
    console.print(f"[bold green]✓[/bold green] Merged document written to {output}")


@app.command()
def validate(
    document: Path = _document_argument("Document to validate (JSON)"),
) -> None:
    """
    Check a document against the content rules enforced by storage.
    """
    errors = validate_document(_load(document))

    if not errors:
        console.print(f"[bold green]✓[/bold green] {document.name} is valid")
        return

    console.print(f"[bold red]✗ {len(errors)} validation error(s):[/bold red]")
    for error in errors:
        console.print(f"   • {error}")
    raise typer.Exit(1)


@app.command("text-diff")
def text_diff(
    existing: Path = _document_argument("Stored document (JSON)"),
    incoming: Path = _document_argument("Newly enriched document (JSON)"),
    field_name: str = typer.Option(
        "description",
        "--field",
        help=f"Text field to diff: {', '.join(TEXT_FIELDS)}",
    ),
) -> None:
    """
    Show a line diff of one text field of two documents.
    """
    if field_name not in TEXT_FIELDS:
        console.print(f"[red]Unknown field '{field_name}'.[/red]")
        raise typer.Exit(1)

    old_text = getattr(_load(existing).content, field_name)
    new_text = getattr(_load(incoming).content, field_name)
    diff = detailed_diff(old_text, new_text)

    for hunk in diff.lines:
        prefix, style = "  ", "dim"
        if hunk.added:
            prefix, style = "+ ", "green"
        elif hunk.removed:
            prefix, style = "- ", "red"
        for line in hunk.value.splitlines():
            console.print(f"{prefix}{line}", style=style, markup=False, highlight=False)

    summary = diff.summary
    console.print(
        f"\n[dim]{summary.additions} added, {summary.deletions} removed, "
        f"{summary.unchanged} unchanged hunk(s)[/dim]"
    )


# Helper functions for output formatting

_SIGNIFICANCE_STYLES = {
    Significance.HIGH: "bold red",
    Significance.MEDIUM: "yellow",
    Significance.LOW: "dim",
}

_RECOMMENDATION_COLORS = {
    Recommendation.CREATE_NEW: "green",
    Recommendation.UPDATE_EXISTING: "cyan",
    Recommendation.MERGE_REQUIRED: "yellow",
    Recommendation.MANUAL_REVIEW: "red",
}


def _preview(value: Optional[str], limit: int = 60) -> str:
    if value is None:
        return "-"
    flat = " ".join(value.split())
    return flat if len(flat) <= limit else flat[: limit - 3] + "..."


def _print_changes_table(analysis: DriftAnalysis) -> None:
    """Print the list of detected changes."""
    if not analysis.changes:
        console.print("[green]No changes detected.[/green]")
        return

    table = Table(title="Detected Changes", box=box.ROUNDED)
    table.add_column("Section", style="cyan", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Significance", no_wrap=True)
    table.add_column("Old", style="dim")
    table.add_column("New")

    for change in analysis.changes:
        style = _SIGNIFICANCE_STYLES[change.significance]
        table.add_row(
            change.section,
            change.type.value,
            f"[{style}]{change.significance.value}[/{style}]",
            _preview(change.old_value),
            _preview(change.new_value),
        )

    console.print(table)


def _print_analysis_summary(analysis: DriftAnalysis) -> None:
    """Print a summary panel with confidence and recommendation."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Changes", str(len(analysis.changes)))
    table.add_row("High", str(analysis.high_count))
    table.add_row("Medium", str(analysis.medium_count))
    table.add_row("Low", str(analysis.low_count))
    table.add_row("Confidence", f"{analysis.confidence:.2f}")

    color = _RECOMMENDATION_COLORS[analysis.recommendation]
    panel = Panel(
        table,
        title=f"[bold {color}]{analysis.recommendation.value}[/bold {color}]",
        border_style=color,
    )
    console.print(panel)


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.value,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Version command
@app.callback(invoke_without_command=True)
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
    log_level: Optional[LogLevel] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default from DOCDRIFT_LOG_LEVEL)",
        case_sensitive=False,
    ),
) -> None:
    """
    Doc-Drift: drift detection and resolution for enriched documentation.
    """
    if version:
        console.print(f"[bold]Doc-Drift[/bold] version {__version__}")
        raise typer.Exit()

    try:
        settings = load_settings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        console.print(f"[bold red]Error:[/bold red] invalid settings: {escape(problems)}")
        raise typer.Exit(1)

    _configure_logging(log_level or LogLevel(settings.log_level))


if __name__ == "__main__":
    app()
