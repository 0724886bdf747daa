"""Click CLI for BefundTool."""

import json
import logging
import sys

import click

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _read_text(path) -> str:
    if path:
        with open(path, encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


@click.group()
def cli():
    """BefundTool: Radiology Report Drafting."""


@cli.command()
def init_db():
    """Create SQLite schema and seed default templates and corrections."""
    from befundtool.database import init_db
    init_db()
    click.echo("Database initialized successfully.")


@cli.command()
def run_web():
    """Start the FastAPI web interface."""
    import uvicorn
    from befundtool.config import settings
    from befundtool.database import init_db
    init_db()
    uvicorn.run(
        "befundtool.web.app:app",
        host=settings.web_host,
        port=settings.web_port,
        reload=False,
    )


@cli.command()
@click.argument("path", required=False, type=click.Path(exists=True, dir_okay=False))
def normalize(path):
    """Normalise a transcript (file or stdin) with the stored corrections."""
    from befundtool.database import init_db
    from befundtool.report.text import process_transcript
    from befundtool.store import get_correction_store
    init_db()
    click.echo(process_transcript(_read_text(path), get_correction_store().load()))


@cli.command()
@click.argument("path", required=False, type=click.Path(exists=True, dir_okay=False))
def rank(path):
    """Rank stored templates against a transcript (file or stdin)."""
    from befundtool.database import init_db
    from befundtool.report.matcher import rank_templates
    from befundtool.store import get_template_store
    init_db()
    ranked = rank_templates(get_template_store().load(), _read_text(path))
    if not ranked:
        click.echo("No template matches.")
        return
    for s in ranked:
        click.echo(f"  {s.template.id:20s}  {s.template.name:40s}  {s.score:3d}  [{s.confidence}]")


@cli.command()
@click.option("--template", "template_id", required=True, help="Template id")
@click.option("--clinical", default=None, help="Clinical data as a JSON object")
@click.option("--study-name", default=None, help="Study name shown as UNTERSUCHUNG")
@click.option("--mode", type=click.Choice(["standard", "expert"]), default="standard")
@click.option("--fallback", is_flag=True, help="Skip the generation model")
@click.option("--html", "as_html", is_flag=True, help="Print HTML instead of plain text")
@click.argument("path", required=False, type=click.Path(exists=True, dir_okay=False))
def compose(template_id, clinical, study_name, mode, fallback, as_html, path):
    """Compose a report for a transcript (file or stdin)."""
    from befundtool.database import init_db
    from befundtool.generator.service import generate_report
    from befundtool.report.assembler import copy_text
    from befundtool.report.fallback import compose_fallback_report
    from befundtool.store import get_template_store
    init_db()

    template = get_template_store().get(template_id)
    if not template:
        click.echo(f"No template found with id '{template_id}'", err=True)
        sys.exit(1)
    try:
        clinical_data = json.loads(clinical) if clinical else {}
    except json.JSONDecodeError as e:
        click.echo(f"Invalid --clinical JSON: {e}", err=True)
        sys.exit(1)

    transcript = _read_text(path)
    if fallback:
        report = compose_fallback_report(transcript, template, clinical_data, study_name)
    else:
        report = generate_report(template, clinical_data, transcript, mode=mode, study_name=study_name)
        if report.error:
            click.echo(f"Fallback used ({report.error['name']}): {report.error['message']}", err=True)

    click.echo(report.html if as_html else copy_text(report.html, report.icd10))


@cli.command()
def templates():
    """List stored templates."""
    from befundtool.database import init_db
    from befundtool.store import get_template_store
    init_db()
    for t in get_template_store().load():
        click.echo(f"  {t.id:20s}  {t.name:40s}  {', '.join(t.keywords)}")


@cli.command()
def seed_templates():
    """Add any missing default templates."""
    from befundtool.database import init_db
    from befundtool.store import get_template_store
    init_db()
    added = get_template_store().append_missing_seed_templates()
    click.echo(f"Added {added} default template(s).")


if __name__ == "__main__":
    cli()
