"""VIM Library command line interface.

Starts the daemon and drives a running daemon's API from the terminal.
"""

import contextlib
import sys
from collections.abc import Iterator
from pathlib import Path

import click
import httpx
import uvicorn

from library_core.client import LibraryClient
from library_core.config.loader import create_default_config
from library_core.config.loader import load_config
from library_core.errors import LibraryError
from library_core.markdown import render_markdown

from . import __version__

url_option = click.option(
    "--url",
    envvar="VIMLIB_URL",
    default="http://127.0.0.1:3000",
    show_default=True,
    help="Base URL of the libraryd server",
)
password_option = click.option(
    "--password",
    envvar="VIMLIB_ADMIN_PASSWORD",
    prompt="Admin password",
    hide_input=True,
    help="Admin password (or set VIMLIB_ADMIN_PASSWORD)",
)


@contextlib.contextmanager
def api_errors() -> Iterator[None]:
    """Turn API failures into click errors with a readable message."""
    try:
        yield
    except LibraryError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e
    except httpx.HTTPError as e:
        raise click.ClickException(f"Cannot reach server: {e}") from e


def admin_client(url: str, password: str) -> LibraryClient:
    client = LibraryClient(url)
    with api_errors():
        if not client.login(password):
            client.close()
            raise click.ClickException("Incorrect password")
    return client


@click.group()
@click.version_option(__version__, prog_name="vimlib")
def main() -> None:
    """VIM Library: browse and manage the library folder."""


@main.command()
@click.option("--host", default=None, help="Host to bind to (default from config)")
@click.option("--port", type=int, default=None, help="Port to listen on (default from config)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Run the libraryd server."""
    config = load_config()
    uvicorn.run(
        "libraryd.main:create_app",
        factory=True,
        host=host or config.host,
        port=port or config.port,
        log_level=config.log_level.lower(),
        reload=reload,
        workers=None if reload else config.workers,
    )


@main.command("init-config")
def init_config() -> None:
    """Write the default configuration file if none exists."""
    path = create_default_config()
    click.echo(f"Config: {path}")


@main.command("ls")
@click.argument("path", default="")
@url_option
def list_cmd(path: str, url: str) -> None:
    """List a folder (default: the library root)."""
    with LibraryClient(url) as client, api_errors():
        listing = client.list_directory(path)
    for folder in listing.folders:
        click.echo(f"{folder}/")
    for name in listing.files:
        click.echo(name)


@main.command()
@click.argument("path")
@click.option("--render", is_flag=True, help="Render markdown files as HTML")
@url_option
def cat(path: str, render: bool, url: str) -> None:
    """Print a file's content."""
    with LibraryClient(url) as client, api_errors():
        record = client.read_file(path)

    if record.kind == "binary":
        click.echo(f"Binary file, download from {url.rstrip('/')}/{record.path}")
    elif render and record.kind == "markdown":
        click.echo(render_markdown(record.content or ""))
    else:
        click.echo(record.content or "", nl=False)


@main.command()
@url_option
def folders(url: str) -> None:
    """List every folder in the library."""
    with LibraryClient(url) as client, api_errors():
        entries = client.enumerate_folders()
    for entry in entries:
        click.echo(entry.path)


@main.command()
@click.argument("path")
@click.option("--file", "source", type=click.File("r", encoding="utf-8"), default="-", help="Read content from file")
@url_option
@password_option
def edit(path: str, source, url: str, password: str) -> None:
    """Replace a file's content with stdin (or --file)."""
    content = source.read()
    with admin_client(url, password) as client, api_errors():
        result = client.write_file(path, content)
    click.echo(result["message"])


@main.command("rm")
@click.argument("path")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@url_option
@password_option
def remove(path: str, yes: bool, url: str, password: str) -> None:
    """Delete a file or folder."""
    if not yes:
        click.confirm(f'Delete "{path}"? This action cannot be undone.', abort=True)
    with admin_client(url, password) as client, api_errors():
        result = client.delete(path)
    click.echo(result["message"])


@main.command()
@click.argument("path")
@url_option
@password_option
def mkdir(path: str, url: str, password: str) -> None:
    """Create a folder."""
    with admin_client(url, password) as client, api_errors():
        result = client.create_folder(path)
    click.echo(result["message"])


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--to", "target", default=None, help="Destination folder (default: library root)")
@url_option
@password_option
def upload(file: Path, target: str | None, url: str, password: str) -> None:
    """Upload a file into the library."""
    with admin_client(url, password) as client, api_errors(), open(file, "rb") as stream:
        result = client.upload(file.name, stream, target)
    click.echo(f"{result['message']}: {result['path']} ({result['size']} bytes)")


if __name__ == "__main__":
    sys.exit(main())
