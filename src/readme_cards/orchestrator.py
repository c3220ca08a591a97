"""Top-level orchestration: fetch -> aggregate -> lay out -> render."""

from __future__ import annotations

import logging

from .aggregator import MAX_LANGS_COUNT, aggregate_languages, trim_top_languages
from .config import CardOptions
from .fetchers import fetch_stats, fetch_top_languages
from .github.client import GitHubClient
from .layout import layout_languages
from .models import AggregationResult
from .renderer import render_json, render_language_card, render_report, render_svg
from .translations import LANG_CARD_LOCALES, I18n

logger = logging.getLogger(__name__)


def build_language_card(aggregation: AggregationResult, options: CardOptions) -> str:
    """Trim already aggregated languages and render them as an SVG card."""
    trimmed = trim_top_languages(aggregation.languages, options.hide, options.langs_count)
    result = layout_languages(
        options.layout, trimmed.languages, trimmed.total_size, options.card_width
    )
    title = options.custom_title or I18n(options.locale, LANG_CARD_LOCALES).t("langcard.title")
    return render_language_card(
        result,
        title,
        hide_title=options.hide_title,
        hide_border=options.hide_border,
    )


async def run(
    username: str,
    token: str,
    options: CardOptions | None = None,
    output_format: str = "svg",
    output_file: str | None = None,
) -> None:
    options = options or CardOptions()

    async with GitHubClient(token) as client:
        repos = await fetch_top_languages(client, username, options.exclude_repo)
        # Aggregate everything so hidden languages do not take up slots.
        aggregation = aggregate_languages(repos, langs_count=MAX_LANGS_COUNT)
        logger.debug(
            "Aggregated %d languages from %d repositories", len(aggregation.languages), len(repos)
        )

        if output_format == "svg":
            render_svg(build_language_card(aggregation, options), output_file=output_file)
            return

        stats = await fetch_stats(
            client,
            username,
            count_private=options.count_private,
            include_all_commits=options.include_all_commits,
        )

    top = trim_top_languages(aggregation.languages, options.hide, options.langs_count)
    if output_format == "json":
        render_json(stats, top, output_file=output_file)
    else:
        render_report(stats, top, output_file=output_file)
