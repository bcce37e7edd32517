"""Main Typer application for Thumbforge."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Annotated

import dotenv
import typer
from rich.console import Console

from thumbforge.config import load_thumbforge_config
from thumbforge.exceptions import ConfigurationError, DecodeError, ThumbforgeError
from thumbforge.generation import create_thumbnail_client
from thumbforge.imaging import normalize
from thumbforge.logging_setup import configure_logging
from thumbforge.output import from_data_url
from thumbforge.session import ThumbnailSession

app = typer.Typer(
    name="thumbforge",
    help="Generate and refine 16:9 thumbnails with Gemini image models",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


def _guess_mime_type(path: Path) -> str | None:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        console.print(f"[red]Failed to read {path}: {e}[/red]")
        raise typer.Exit(1) from e


def _read_previous_thumbnail(path: Path) -> bytes:
    """Read raw image bytes, or a file holding a data URL of the image."""
    raw = _read_file(path)
    if not raw.lstrip().startswith(b"data:"):
        return raw
    try:
        image, _ = from_data_url(raw.decode("ascii").strip())
    except (UnicodeDecodeError, ValueError) as e:
        console.print(f"[red]Invalid data URL in {path}: {e}[/red]")
        raise typer.Exit(1) from e
    return image


@app.callback()
def main() -> None:
    """Load .env and configure logging before any command runs."""
    dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
    configure_logging()


@app.command()
def generate(
    prompt: Annotated[str, typer.Argument(help="Description of the thumbnail (or the adjustment when refining)")],
    *,
    reference: Annotated[
        Path | None,
        typer.Option("--reference", "-r", help="Reference photo; cropped to 16:9 before upload"),
    ] = None,
    refine: Annotated[
        Path | None,
        typer.Option("--refine", help="Previously generated thumbnail to refine (image file or data URL)"),
    ] = None,
    output_dir: Annotated[
        Path, typer.Option("--output-dir", "-o", help="Directory for the generated thumbnail")
    ] = Path(),
    filename: Annotated[
        str | None, typer.Option(help="Override the output filename")
    ] = None,
) -> None:
    """Generate a thumbnail, optionally guided by a reference or refining an earlier one."""
    config = load_thumbforge_config()
    try:
        client = create_thumbnail_client(config=config)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    session = ThumbnailSession(client)
    if refine is not None:
        try:
            session.seed_result(_read_previous_thumbnail(refine))
        except DecodeError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1) from e
    if reference is not None:
        if session.attach_reference(_read_file(reference), _guess_mime_type(reference)) is None:
            console.print(f"[red]{session.error}[/red]")
            raise typer.Exit(1)

    with console.status("Generating thumbnail..."):
        image = session.generate(prompt)
    if image is None:
        console.print(f"[red]{session.error}[/red]")
        raise typer.Exit(1)

    try:
        path = session.save(output_dir, filename)
    except (OSError, ThumbforgeError) as e:
        console.print(f"[red]Failed to save thumbnail: {e}[/red]")
        raise typer.Exit(1) from e
    console.print(f"[green]Thumbnail saved to {path}[/green]")


@app.command("normalize")
def normalize_command(
    input_file: Annotated[Path, typer.Argument(help="Image to crop and resize")],
    *,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Destination file (defaults to <name>-16x9.<ext>)"),
    ] = None,
) -> None:
    """Write the canonical 16:9 rendition of an image."""
    config = load_thumbforge_config()
    try:
        reference = normalize(_read_file(input_file), _guess_mime_type(input_file), config.image)
    except DecodeError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    if output is None:
        suffix = ".jpg" if reference.mime_type == "image/jpeg" else ".png"
        output = input_file.with_name(f"{input_file.stem}-16x9{suffix}")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(reference.data)
    console.print(
        f"[green]Wrote {config.image.width}x{config.image.height} {reference.mime_type} to {output}[/green]"
    )
