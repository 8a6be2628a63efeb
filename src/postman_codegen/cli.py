"""CLI entry point for postman-codegen."""

import logging
import re
from pathlib import Path

import click

from postman_codegen.config import load_settings
from postman_codegen.errors import CodegenError
from postman_codegen.generator.registry import display_name, list_languages
from postman_codegen.session import CollectionSession


def _output_file(output: Path, filename: str, request_id: str, taken: set[str]) -> Path:
    """Path inside `output` for one snippet, unique within the current run."""
    filename = re.sub(r"[\\/]", "-", filename)
    if filename in taken:
        stem, dot, ext = filename.rpartition(".")
        filename = f"{stem}-{request_id}{dot}{ext}"
    taken.add(filename)
    return output / filename


def _load_session(ctx: click.Context, collection_path: Path) -> CollectionSession:
    """Load a collection file into a fresh session, surfacing bad input to the user."""
    session = CollectionSession(ctx.obj["settings"])
    try:
        session.load_text(collection_path.read_text(encoding="utf-8"))
    except CodegenError as e:
        raise click.ClickException(f"Invalid Postman collection file {collection_path}: {e}") from e
    return session


@click.group()
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path), help="YAML settings file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool):
    """Postman Codegen: turn Postman collection requests into code snippets."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    try:
        settings = load_settings(config_path)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj = {"settings": settings}


@main.command()
@click.option("--all", "show_all", is_flag=True, help="Include languages outside the default selector.")
@click.pass_context
def languages(ctx: click.Context, show_all: bool):
    """List supported language ids."""
    ids = list_languages() if show_all else ctx.obj["settings"].languages
    for language_id in ids:
        click.echo(f"{language_id}\t{display_name(language_id)}")


@main.command()
@click.argument("collection_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def requests(ctx: click.Context, collection_path: Path):
    """List the requests in a collection."""
    session = _load_session(ctx, collection_path)
    version = session.schema_version or "unknown schema"
    click.echo(f"{session.name or collection_path.name} ({version}): {len(session.requests)} requests")
    for request in session.requests:
        click.echo(f"{request.id}\t{request.method.value}\t{request.name}")


@main.command()
@click.argument("collection_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-l", "--language", default=None, type=click.Choice(list_languages()), help="Target language id.")
@click.option("-r", "--request", "request_ids", multiple=True, help="Request id to generate (repeatable, default: all).")
@click.option("-o", "--output", default=None, type=click.Path(file_okay=False, path_type=Path), help="Write snippets to this directory.")
@click.option("--append", is_flag=True, help="Keep existing files in the output directory.")
@click.pass_context
def generate(
    ctx: click.Context,
    collection_path: Path,
    language: str | None,
    request_ids: tuple[str, ...],
    output: Path | None,
    append: bool,
):
    """Generate code snippets for requests in a collection."""
    settings = ctx.obj["settings"]
    session = _load_session(ctx, collection_path)
    session.select_language(language or settings.default_language)
    output = output or settings.output_dir

    ids = list(request_ids) or [r.id for r in session.requests]
    if output is not None:
        output.mkdir(parents=True, exist_ok=True)

    written = 0
    taken: set[str] = set()
    for request_id in ids:
        if session.select_request(request_id) is None:
            raise click.ClickException(f"No request with id {request_id!r}")
        code = session.generated_code()
        if output is None:
            click.echo(code)
            continue
        file_path = _output_file(output, session.export_filename(), request_id, taken)
        if append and file_path.exists():
            click.echo(f"  Skipped {file_path} (exists)")
            continue
        try:
            file_path.write_text(code, encoding="utf-8")
        except OSError as e:
            raise click.ClickException(f"Could not write {file_path}: {e}") from e
        click.echo(f"  Created {file_path}")
        written += 1

    if output is not None:
        click.echo(f"Generated {written} files in {output}")
