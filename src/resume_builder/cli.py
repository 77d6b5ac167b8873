"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
import webbrowser
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from resume_builder.clients.llm_client import LLMClient
from resume_builder.clients.registrar_client import RegistrarClient
from resume_builder.config import load_config
from resume_builder.errors import ResumeBuilderError
from resume_builder.export.pdf_renderer import pdf_filename, render_pdf
from resume_builder.models.resume import ResumeDocument, new_entry_id
from resume_builder.pipeline.assist import SuggestionAssistant
from resume_builder.pipeline.publication import PublicationFlow, full_domain, normalize_domain_label
from resume_builder.pipeline.publisher import WebsitePublisher
from resume_builder.storage.resume_io import load_resume, save_resume
from resume_builder.storage.site_store import SiteStore
from resume_builder.templates.layouts import list_templates
from resume_builder.templates.renderer import render_preview, save_html
from resume_builder.viewer.server import serve as serve_sites
from resume_builder.website.generator import generate_website

app = typer.Typer(
    name="resume-builder",
    help="Build resumes, export them and publish them as websites",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load(resume: Path) -> ResumeDocument:
    if not resume.exists():
        console.print(f"[red]Resume file not found: {resume}[/red]")
        raise typer.Exit(1)
    try:
        return load_resume(resume)
    except ValueError as exc:
        console.print(f"[red]Could not read {resume}: {exc}[/red]")
        raise typer.Exit(1)


def _fail(exc: Exception) -> None:
    console.print(f"[red]Error: {exc}[/red]")
    raise typer.Exit(1)


@app.command()
def new(
    output: Path = typer.Argument(help="Where to write the new resume (.json or .yaml)"),
    title: str = typer.Option("Untitled Resume", "--title", help="Resume title"),
    template: str = typer.Option("modern", "--template", "-t", help="modern | classic | minimal"),
) -> None:
    """Create an empty resume file."""
    if output.exists():
        console.print(f"[red]File already exists: {output}[/red]")
        raise typer.Exit(1)
    doc = ResumeDocument.empty(title=title, template_id=template)
    save_resume(doc, output)
    console.print(f"[green]Created {output} ({doc.template_id.value})[/green]")


@app.command()
def render(
    resume: Path = typer.Argument(help="Resume file (.json or .yaml)"),
    template: str = typer.Option(None, "--template", "-t", help="Override the resume's template"),
    output: Path = typer.Option(None, "--output", "-o", help="Output .html path"),
    open_browser: bool = typer.Option(False, "--open", help="Open the preview in a browser"),
) -> None:
    """Render the HTML preview of a resume."""
    doc = _load(resume)
    html = render_preview(doc, template)
    output = output or resume.with_suffix(".html")
    save_html(html, output)
    console.print(f"[green]Preview saved: {output}[/green]")
    if open_browser:
        webbrowser.open(output.resolve().as_uri())


@app.command()
def site(
    resume: Path = typer.Argument(help="Resume file (.json or .yaml)"),
    output: Path = typer.Option(None, "--output", "-o", help="Output .html path"),
) -> None:
    """Generate the standalone website HTML without publishing it."""
    doc = _load(resume)
    output = output or resume.with_name(f"{resume.stem}-site.html")
    save_html(generate_website(doc), output)
    console.print(f"[green]Website saved: {output}[/green]")


@app.command()
def pdf(
    resume: Path = typer.Argument(help="Resume file (.json or .yaml)"),
    template: str = typer.Option(None, "--template", "-t", help="Override the resume's template"),
    output: Path = typer.Option(None, "--output", "-o", help="Output .pdf path"),
) -> None:
    """Export the resume as a PDF."""
    config = load_config()
    doc = _load(resume)
    output = output or resume.parent / pdf_filename(doc)
    with console.status("Generating PDF..."):
        data = render_pdf(doc, template, page_size=config.export.page_size)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(data)
    console.print(f"[green]PDF saved: {output}[/green]")


@app.command("check-domain")
def check_domain(
    name: str = typer.Argument(help="Domain name without extension"),
    extension: str = typer.Option(None, "--ext", "-e", help="Domain extension, e.g. .me"),
) -> None:
    """Check whether a domain is available."""
    config = load_config()
    extension = extension or config.publish.default_extension
    if extension not in config.publish.extensions:
        _fail(ValueError(f"Unsupported extension {extension}; use one of {config.publish.extensions}"))
    label = normalize_domain_label(name)
    if not label:
        _fail(ValueError("Please enter a domain name"))
    domain = full_domain(label, extension)

    try:
        registrar = RegistrarClient(
            api_url=config.registrar.api_url, timeout=config.registrar.timeout
        )
        with console.status(f"Checking {domain}..."):
            result = asyncio.run(registrar.check_availability(domain))
    except (ResumeBuilderError, ValueError) as exc:
        _fail(exc)

    if result.available:
        price = f" (${result.price:.2f})" if result.price is not None else ""
        console.print(f"[green]✓ {domain} is available{price}[/green]")
    else:
        console.print(f"[yellow]✗ {domain} is taken. Try another name.[/yellow]")


@app.command()
def publish(
    resume: Path = typer.Argument(help="Resume file (.json or .yaml)"),
    name: str = typer.Option(..., "--domain", "-d", help="Domain name without extension"),
    extension: str = typer.Option(None, "--ext", "-e", help="Domain extension, e.g. .me"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Publish without asking"),
) -> None:
    """Check a domain, then register it and publish the resume website."""
    config = load_config()
    doc = _load(resume)
    if not doc.id:
        # the file is the resume's persistence, so give it an identity now
        doc.id = new_entry_id()
        save_resume(doc, resume)

    async def _run() -> None:
        registrar = RegistrarClient(
            api_url=config.registrar.api_url, timeout=config.registrar.timeout
        )
        store = SiteStore(config.storage.resolved_db_path)
        flow = PublicationFlow(
            doc,
            registrar,
            WebsitePublisher(registrar, store),
            extensions=config.publish.extensions,
            extension=extension or config.publish.default_extension,
            on_published=lambda d: save_resume(d, resume),
        )
        flow.set_label(name)
        with console.status(f"Checking {flow.domain}..."):
            checked = await flow.check_domain()
        if checked is None or not checked.available:
            console.print(f"[yellow]✗ {flow.domain} is taken. Try another name.[/yellow]")
            raise typer.Exit(1)
        if not yes and not typer.confirm(f"Register {flow.domain} and publish?"):
            raise typer.Exit(0)
        with console.status(f"Publishing {flow.domain}..."):
            result = await flow.publish()
        console.print(Panel(
            f"[bold]{result.website_url}[/bold]\nPublished at {result.published_at:%Y-%m-%d %H:%M UTC}",
            title="Published",
        ))

    try:
        asyncio.run(_run())
    except (ResumeBuilderError, ValueError) as exc:
        _fail(exc)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
) -> None:
    """Serve published websites from the local store."""
    config = load_config()
    store = SiteStore(config.storage.resolved_db_path)
    console.print(f"[green]Serving published websites on http://{host}:{port}/<domain>[/green]")
    try:
        serve_sites(store, host=host, port=port)
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


@app.command()
def suggest(
    resume: Path = typer.Argument(help="Resume file (.json or .yaml)"),
    kind: str = typer.Argument(help="summary | experience"),
    entry: str = typer.Option(None, "--entry", help="Experience entry id (for 'experience')"),
    write: bool = typer.Option(False, "--write", "-w", help="Save the suggestion into the resume file"),
) -> None:
    """Generate an AI suggestion for the summary or an experience description."""
    if kind not in ("summary", "experience"):
        _fail(ValueError("kind must be 'summary' or 'experience'"))
    config = load_config()
    doc = _load(resume)
    if kind == "experience" and not entry:
        if not doc.experiences:
            _fail(ValueError("The resume has no experience entries"))
        entry = doc.experiences[0].id

    async def _run() -> str:
        assistant = SuggestionAssistant(
            LLMClient(timeout=config.assist.timeout),
            model=config.assist.model,
            max_tokens=config.assist.max_tokens,
        )
        if kind == "summary":
            return (await assistant.apply_summary_suggestion(doc)).summary
        return (await assistant.apply_experience_suggestion(doc, entry)).description

    try:
        with console.status("Generating..."):
            content = asyncio.run(_run())
    except Exception as exc:
        _fail(exc)

    console.print(Panel(content, title=f"Suggested {kind}"))
    if write:
        save_resume(doc, resume)
        console.print(f"[green]Saved to {resume}[/green]")


@app.command()
def templates() -> None:
    """List the available templates."""
    table = Table("id", "name", "skills layout", "contact separator")
    for layout in list_templates():
        table.add_row(
            layout.template_id.value,
            layout.display_name,
            layout.skills_style,
            repr(layout.contact_separator),
        )
    console.print(table)


if __name__ == "__main__":
    app()
