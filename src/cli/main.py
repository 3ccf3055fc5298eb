"""CLI interface for the Persona Fact Sheet Generator."""
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from core.providers.base import ConfigurationError, LLMError

app = typer.Typer(help="Persona Fact Sheet Generator - AI fact sheets for a named person")

logger = logging.getLogger(__name__)

FORMATS = ("json", "markdown", "pdf", "docx")


def _configure_logging(level: int) -> None:
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def generate(
    name: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    output_format: str = "json",
    out: Optional[str] = None,
):
    """Generate a fact sheet and write it in the requested format.

    Returns the path written for pdf/docx, otherwise the rendered text
    (which is also echoed to stdout).
    """
    from ..config.models import AppSettings
    from ..export import export_filename, render_markdown, write_docx, write_pdf
    from ..extract.generator import FactSheetGenerator

    if output_format not in FORMATS:
        raise typer.BadParameter(f"format must be one of: {', '.join(FORMATS)}")

    settings = AppSettings.from_env()
    overrides = {}
    if model:
        overrides["model"] = model
    if temperature is not None:
        overrides["temperature"] = temperature
    if overrides:
        settings = AppSettings(**{**settings.model_dump(), **overrides})

    key = api_key or settings.api_key
    generator = FactSheetGenerator(config=settings.to_llm_config())
    fact_sheet = generator.generate(name, key)

    if output_format == "json":
        text = json.dumps(fact_sheet.to_wire(), ensure_ascii=False, indent=2)
    elif output_format == "markdown":
        text = render_markdown(fact_sheet, name)
    else:
        writer = write_pdf if output_format == "pdf" else write_docx
        path = Path(out) if out else Path(export_filename(name, output_format))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(writer(fact_sheet, name))
        typer.echo(f"✓ Fact sheet saved to {path}")
        return path

    if out:
        Path(out).write_text(text, encoding="utf-8")
        typer.echo(f"✓ Fact sheet saved to {out}")
    else:
        typer.echo(text)
    return text


@app.command("generate")
def cli_generate(
    name: str = typer.Argument(..., help="Name of the person, e.g. \"Ada Lovelace\""),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="Gemini API key (default: $GOOGLE_API_KEY or $GEMINI_API_KEY)"
    ),
    model: Optional[str] = typer.Option(None, help="Gemini model id (see `models`)"),
    temperature: Optional[float] = typer.Option(None, help="Sampling temperature (default 0.5)"),
    output_format: str = typer.Option("json", "--format", "-f", help="json, markdown, pdf or docx"),
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Output file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Generate a fact sheet for NAME."""
    _configure_logging(logging.DEBUG if verbose else logging.WARNING)
    try:
        generate(name, api_key, model, temperature, output_format, out)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc} Set --api-key or GOOGLE_API_KEY.", err=True)
        raise typer.Exit(code=2)
    except ValidationError as exc:
        typer.echo(f"Error: invalid settings\n{exc}", err=True)
        raise typer.Exit(code=2)
    except (LLMError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("models")
def cli_models():
    """List the Gemini models that can be selected."""
    from core.providers.registry import DEFAULT_MODEL, get_model_catalog

    for m in get_model_catalog():
        marker = " (default)" if m["model_id"] == DEFAULT_MODEL else ""
        typer.echo(f"{m['model_id']:<24} {m['label']}{marker} - {m['description']}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    sys.exit(main())
