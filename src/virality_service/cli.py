"""Command line runner for the video analysis queue."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import settings
from .models.queue import IntakeFile, QueueItem, QueueStatus
from .services.export import DOCX_FILENAME, PDF_FILENAME, NothingToExportError
from .services.gemini_client import build_prompt
from .services.previews import preview_scope
from .services.workspace import VideoWorkspace, create_workspace

app = typer.Typer(help="Analyze short videos and generate social captions")
console = Console()

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

STATUS_STYLES = {
    QueueStatus.QUEUED: "dim",
    QueueStatus.ANALYZING: "yellow",
    QueueStatus.COMPLETE: "green",
    QueueStatus.ERROR: "red",
}


def _read_file(path: Path) -> IntakeFile:
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return IntakeFile(filename=path.name, content_type=content_type, data=path.read_bytes())


def _show_queue_table(items: tuple[QueueItem, ...]) -> None:
    """Show queue items and their outcome."""
    table = Table(title="Analysis Results")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Video", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Keywords")
    table.add_column("Captions", justify="right")

    for index, item in enumerate(items, start=1):
        style = STATUS_STYLES[item.status]
        keywords = ", ".join(item.result.keywords[:5]) if item.result else (item.error or "-")
        captions = str(len(item.result.captions)) if item.result else "-"
        table.add_row(
            str(index),
            item.name[:40],
            f"[{style}]{item.status.value}[/{style}]",
            keywords,
            captions,
        )

    console.print(table)


def _write_export(label: str, render, destination: Path) -> None:
    try:
        content = render()
    except NothingToExportError as e:
        console.print(f"[yellow]{label}: {e}[/yellow]")
        return
    destination.write_bytes(content)
    console.print(f"[green]✓[/green] {label} written to {destination}")


async def _run(workspace: VideoWorkspace, files: list[IntakeFile]) -> None:
    outcome = workspace.add_files(files)
    if outcome.warning:
        console.print(f"[yellow]{outcome.warning}[/yellow]")
    if not outcome.items:
        return

    console.print(f"Queued {len(outcome.items)} videos, analyzing one at a time...")
    try:
        await workspace.wait_idle()
    finally:
        await workspace.engine.close()


@app.command()
def analyze(
    files: list[Path] = typer.Argument(..., help="Video files to analyze", exists=True, dir_okay=False),
    caption_length: int = typer.Option(
        None,
        "--caption-length",
        "-l",
        min=1,
        help="Target caption length in characters (default: model decides)",
    ),
    pdf: Path = typer.Option(None, "--pdf", help=f"Write a PDF report (e.g. {PDF_FILENAME})"),
    docx: Path = typer.Option(None, "--docx", help=f"Write a Word report (e.g. {DOCX_FILENAME})"),
):
    """Queue videos, analyze them in order and export the results."""
    if not settings.gemini_api_key:
        console.print("[red]VIRALITY_GEMINI_API_KEY is not set[/red]")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold]Virality Analysis[/bold]\n"
        f"Videos: {len(files)}\n"
        f"Caption length: {caption_length or 'auto'}",
        title="analyze",
    ))

    candidates = [_read_file(path) for path in files]

    with preview_scope(settings.preview_dir) as previews:
        workspace = create_workspace(settings, previews)
        if caption_length is not None:
            workspace.set_caption_length(caption_length)

        asyncio.run(_run(workspace, candidates))

        if not workspace.items:
            raise typer.Exit(1)

        _show_queue_table(workspace.items)

        if pdf:
            _write_export("PDF", workspace.export_pdf, pdf)
        if docx:
            _write_export("DOCX", workspace.export_docx, docx)

    failed = sum(1 for item in workspace.items if item.status == QueueStatus.ERROR)
    if failed:
        console.print(f"[red]✗ Failed: {failed}[/red]")
        raise typer.Exit(1)

    console.print("\n[bold green]Done![/bold green]")


@app.command()
def prompt(
    caption_length: int = typer.Option(None, "--caption-length", "-l", min=1, help="Target caption length"),
):
    """Print the prompt sent with each video."""
    console.print(build_prompt(caption_length), soft_wrap=True, markup=False)


if __name__ == "__main__":
    app()
