import logging
import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
import yaml  # type: ignore
from dotenv import load_dotenv

from rtfterms.converter import decode_document, html_to_rtf, rtf_to_html
from rtfterms.envelope import wrap_envelope
from rtfterms.file_store import FileStoreError, store_from_env
from rtfterms.json_utils import json_dumps
from rtfterms.terms import SETTINGS_FILE, load_terms_html, save_terms_html

try:
    __version__ = version("rtfterms")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"


def _settings_file(file_name: Optional[str]) -> str:
    """Return the settings file name from the option or the environment."""

    return file_name or os.environ.get("RTFTERMS_SETTINGS_FILE", SETTINGS_FILE)


def _read_input(source: str) -> str:
    """Read text from ``source``; ``-`` stands for standard input."""

    with click.open_file(source, "r", encoding="utf-8") as stream:
        return stream.read()


def _write_output(content: str, output_path: Optional[str]) -> None:
    """Write ``content`` to ``output_path`` or echo it to the console."""

    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
    else:
        click.echo(content)


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="RTFTERMS_LOG_FILE",
)
@click.version_option(__version__, prog_name="rtfterms")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Convert terms and conditions between HTML and RTF.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()


@cli.command("to-rtf")
@click.argument("input_path", metavar="INPUT")
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write the RTF to FILE instead of the console.",
)
@click.option(
    "--envelope/--no-envelope",
    default=False,
    help="Wrap the RTF in the settings JSON envelope.",
)
def to_rtf(
    input_path: str, output_path: Optional[str] = None, envelope: bool = False
) -> None:
    """Encode an HTML file as RTF.

    Args:
        input_path: HTML file, or ``-`` for standard input.
        output_path: Optional destination file.
        envelope: Emit ``{"TermsAndConditions": {"Content": ...}}``.
    """

    rtf = html_to_rtf(_read_input(input_path))
    _write_output(wrap_envelope(rtf) if envelope else rtf, output_path)


@cli.command("to-html")
@click.argument("input_path", metavar="INPUT")
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write the HTML to FILE instead of the console.",
)
def to_html(input_path: str, output_path: Optional[str] = None) -> None:
    """Decode an RTF file, or a settings envelope, as HTML.

    Args:
        input_path: RTF or JSON file, or ``-`` for standard input.
        output_path: Optional destination file.
    """

    _write_output(rtf_to_html(_read_input(input_path)), output_path)


@cli.command()
@click.argument("input_path", metavar="INPUT")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format.",
)
def parse(input_path: str, output_format: str = "json") -> None:
    """Dump the logical structure decoded from an RTF file.

    Args:
        input_path: RTF or JSON file, or ``-`` for standard input.
        output_format: Format of the dump.
    """

    data = decode_document(_read_input(input_path)).to_dict()

    if output_format == "json":
        click.echo(json_dumps(data, indent=True))
    else:
        click.echo(yaml.safe_dump(data, allow_unicode=True, sort_keys=False))


@cli.command()
@click.option(
    "--file",
    "file_name",
    default=None,
    help="Settings file name in the store.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write the HTML to FILE instead of the console.",
)
def pull(
    file_name: Optional[str] = None, output_path: Optional[str] = None
) -> None:
    """Load the stored terms and print them as HTML.

    Args:
        file_name: Settings file name; ``RTFTERMS_SETTINGS_FILE`` or
            ``app_settings.json`` by default.
        output_path: Optional destination file.
    """

    name = _settings_file(file_name)
    try:
        html = load_terms_html(store_from_env(), name)
    except FileStoreError as exc:
        raise click.ClickException(str(exc)) from exc
    if html is None:
        raise click.ClickException(f"{name} was not found in the store.")
    _write_output(html, output_path)


@cli.command()
@click.argument("html_path", metavar="HTML_FILE")
@click.option(
    "--file",
    "file_name",
    default=None,
    help="Settings file name in the store.",
)
def push(html_path: str, file_name: Optional[str] = None) -> None:
    """Encode an HTML file and save it as the stored terms.

    Args:
        html_path: Edited HTML, or ``-`` for standard input.
        file_name: Settings file name; ``RTFTERMS_SETTINGS_FILE`` or
            ``app_settings.json`` by default.
    """

    name = _settings_file(file_name)
    if not save_terms_html(store_from_env(), _read_input(html_path), name):
        raise click.ClickException(f"Saving the terms to {name} failed.")
    click.echo(f"Saved terms to {name}")
