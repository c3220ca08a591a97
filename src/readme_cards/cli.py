"""Command-line entry point."""

from __future__ import annotations

import asyncio
import logging

import click
from rich.logging import RichHandler

from . import __version__
from .errors import CardError
from .layout import Layout


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@click.command()
@click.argument("username")
@click.option("--token", envvar="GITHUB_TOKEN", required=True, help="GitHub token (or GITHUB_TOKEN).")
@click.option(
    "--layout",
    type=click.Choice([layout.value for layout in Layout], case_sensitive=False),
    default=Layout.NORMAL.value,
    show_default=True,
    help="Language card layout.",
)
@click.option("--langs-count", default=5, show_default=True, help="Languages to show (1-10).")
@click.option("--hide", multiple=True, help="Languages to hide, comma separated or repeated.")
@click.option("--exclude-repo", multiple=True, help="Repository globs to exclude ('*' wildcard).")
@click.option("--card-width", type=float, default=None, help="Card width (minimum 230).")
@click.option("--count-private", is_flag=True, help="Count private contributions.")
@click.option("--include-all-commits", is_flag=True, help="Count all commits, not just this year's.")
@click.option("--locale", default=None, help="Locale of the card title.")
@click.option("--custom-title", default=None, help="Replace the card title.")
@click.option("--hide-title", is_flag=True, help="Render the card without a title.")
@click.option("--hide-border", is_flag=True, help="Render the card without a border.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["svg", "json", "table"]),
    default="svg",
    show_default=True,
    help="Output format.",
)
@click.option("--output", "output_file", default=None, help="Write output to a file.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__)
def main(
    username: str,
    token: str,
    layout: str,
    langs_count: int,
    hide: tuple[str, ...],
    exclude_repo: tuple[str, ...],
    card_width: float | None,
    count_private: bool,
    include_all_commits: bool,
    locale: str | None,
    custom_title: str | None,
    hide_title: bool,
    hide_border: bool,
    output_format: str,
    output_file: str | None,
    verbose: bool,
) -> None:
    """Render a GitHub user's most used languages and rank.

    USERNAME is the GitHub login to summarize.
    """
    from .config import CardOptions
    from .orchestrator import run

    _configure_logging(verbose)

    try:
        options = CardOptions.from_raw(
            langs_count=langs_count,
            hide=hide,
            exclude_repo=exclude_repo,
            layout=layout,
            card_width=card_width,
            count_private=count_private,
            include_all_commits=include_all_commits,
            locale=locale,
            custom_title=custom_title,
            hide_title=hide_title,
            hide_border=hide_border,
        )
        asyncio.run(
            run(
                username=username,
                token=token,
                options=options,
                output_format=output_format,
                output_file=output_file,
            )
        )
    except CardError as exc:
        raise click.ClickException(str(exc)) from exc
