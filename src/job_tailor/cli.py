"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from job_tailor.config import load_config
from job_tailor.export import RENDERERS
from job_tailor.export.pdf_renderer import PdfRenderer
from job_tailor.export.docx_renderer import DocxRenderer
from job_tailor.export.word_renderer import WordRenderer
from job_tailor.logging.usage_store import UsageStore
from job_tailor.parsers.jd_parser import load_job_posting
from job_tailor.store.document_store import DocumentStore
from job_tailor.store.local_store import LocalStore
from job_tailor.wizard.controller import WizardController
from job_tailor.wizard.factory import build_controller, build_llm

app = typer.Typer(
    name="job-tailor",
    help="ATS scoring and tailored application documents",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _make_renderer(fmt: str):
    config = load_config()
    if fmt == "pdf":
        return PdfRenderer(header_threshold=config.export.header_threshold)
    if fmt == "docx":
        return DocxRenderer(header_threshold=config.export.header_threshold)
    return WordRenderer()


def _check_format(fmt: str) -> str:
    fmt = fmt.lower()
    if fmt not in RENDERERS:
        console.print(f"[red]Unknown format: {fmt} (choose from {', '.join(RENDERERS)})[/red]")
        raise typer.Exit(1)
    return fmt


def _load_inputs(controller: WizardController, resume: Path, jd: Path) -> None:
    """Walk the wizard up to the job details step with the given files."""
    for path, label in ((resume, "Resume"), (jd, "Job description")):
        if not path.exists():
            console.print(f"[red]{label} file not found: {path}[/red]")
            raise typer.Exit(1)

    ok = asyncio.run(controller.import_resume(resume.name, resume.read_bytes()))
    if not ok:
        console.print(f"[red]{controller.state.error}[/red]")
        raise typer.Exit(1)
    controller.set_job_posting(load_job_posting(jd))
    controller.start()
    controller.continue_to_job_details()


def _run_analysis(controller: WizardController) -> None:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Analyzing ATS match...", total=None)
        ok = asyncio.run(controller.analyze())
    if not ok:
        console.print(f"[red]{controller.state.error}[/red]")
        raise typer.Exit(1)


def _print_analysis(controller: WizardController) -> None:
    analysis = controller.state.analysis
    color = "green" if analysis.score >= 75 else "yellow" if analysis.score >= 50 else "red"
    console.print(Panel(f"[bold {color}]{analysis.display_score}[/bold {color}] / 100", title="ATS Score"))

    table = Table(show_header=True)
    table.add_column("Missing keywords", style="red")
    table.add_column("Strengths", style="green")
    rows = max(len(analysis.missing_keywords), len(analysis.strengths))
    for i in range(rows):
        table.add_row(
            analysis.missing_keywords[i] if i < len(analysis.missing_keywords) else "",
            analysis.strengths[i] if i < len(analysis.strengths) else "",
        )
    console.print(table)

    if analysis.suggestions:
        console.print("\n[bold]Suggestions[/bold]")
        for s in analysis.suggestions:
            console.print(f"  - {s}")


@app.command()
def analyze(
    resume: Path = typer.Option(..., "--resume", help="Resume file (PDF/DOCX/TXT/MD/RTF)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
) -> None:
    """Score a resume against a job description."""
    controller = build_controller()
    _load_inputs(controller, resume, jd)
    _run_analysis(controller)
    _print_analysis(controller)


@app.command()
def tailor(
    resume: Path = typer.Option(..., "--resume", help="Resume file (PDF/DOCX/TXT/MD/RTF)"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    out: Path = typer.Option(Path("./output"), "--out", "-o", help="Output directory"),
    fmt: str = typer.Option("pdf", "--format", "-f", help="pdf, doc or docx"),
) -> None:
    """Analyze, then generate a tailored CV, cover letter and outreach email."""
    fmt = _check_format(fmt)
    config = load_config()
    llm = build_llm(config)
    controller = build_controller(config, llm=llm)
    _load_inputs(controller, resume, jd)
    _run_analysis(controller)
    _print_analysis(controller)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Generating tailored documents...", total=None)
        ok = asyncio.run(controller.request_tailoring())
    if not ok:
        console.print(f"[red]{controller.state.error}[/red]")
        raise typer.Exit(1)

    out.mkdir(parents=True, exist_ok=True)
    renderer = _make_renderer(fmt)
    for kind in ("cv", "cover_letter"):
        exported = controller.export_document(kind, renderer)
        path = out / exported.filename
        path.write_bytes(exported.data)
        console.print(f"[green]Saved {path}[/green]")

    email_path = out / "Outreach_Email.txt"
    email_path.write_text(controller.state.tailored.email_body, encoding="utf-8")
    console.print(f"[green]Saved {email_path}[/green]")
    console.print(f"\nOpen in mail client: {controller.mailto_url()}")

    tokens = llm.get_token_summary()
    console.print(
        f"[dim]Tokens: {tokens['input']:,} in / {tokens['output']:,} out "
        f"across {len(tokens['calls'])} request(s)[/dim]"
    )


@app.command()
def export(
    source: Path = typer.Argument(help="Markdown or text file to export"),
    fmt: str = typer.Option("pdf", "--format", "-f", help="pdf, doc or docx"),
    stem: str = typer.Option(None, "--stem", help="Output filename without extension"),
    out: Path = typer.Option(Path("."), "--out", "-o", help="Output directory"),
) -> None:
    """Export a text file to PDF or Word."""
    if not source.exists():
        console.print(f"[red]File not found: {source}[/red]")
        raise typer.Exit(1)
    fmt = _check_format(fmt)
    exported = _make_renderer(fmt).render(source.read_text(encoding="utf-8"), stem or source.stem)
    out.mkdir(parents=True, exist_ok=True)
    path = out / exported.filename
    path.write_bytes(exported.data)
    console.print(f"[green]Saved {path}[/green]")


@app.command()
def usage(
    limit: int = typer.Option(10, "--limit", "-n", help="Recent requests to list"),
) -> None:
    """Show request counts, token totals and the most recent requests."""
    config = load_config()
    if not config.usage.enabled:
        console.print("[yellow]Usage logging is disabled (usage.enabled: false).[/yellow]")
        raise typer.Exit(1)
    store = UsageStore(config.usage.resolved_db_path)
    stats = store.get_stats()
    avg = stats["avg_score"] if stats["avg_score"] is not None else "-"
    console.print(Panel(
        f"Requests: {stats['total']} ({stats['succeeded']} ok, {stats['failed']} failed)\n"
        f"Tokens: {stats['input_tokens']:,} in / {stats['output_tokens']:,} out\n"
        f"Average ATS score: {avg}",
        title="Usage",
    ))

    logs = store.get_logs(limit=limit)
    if not logs:
        return
    table = Table(show_header=True)
    table.add_column("When")
    table.add_column("Mode")
    table.add_column("Score", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Result")
    for log in logs:
        table.add_row(
            log.timestamp.strftime("%Y-%m-%d %H:%M"),
            log.mode,
            str(log.score) if log.score is not None else "",
            f"{log.input_tokens + log.output_tokens:,}",
            "[green]ok[/green]" if log.success else f"[red]{log.error_message or 'failed'}[/red]",
        )
    console.print(table)


@app.command()
def clear() -> None:
    """Remove the stored resume and job description."""
    config = load_config()
    DocumentStore(LocalStore(config.store.resolved_db_path)).clear()
    console.print("[green]Stored resume and job description removed.[/green]")


if __name__ == "__main__":
    app()
