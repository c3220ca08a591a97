"""SVG card, rich terminal report and JSON renderers."""

from __future__ import annotations

import html
import io
import json
from dataclasses import asdict

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .aggregator import percentage
from .geometry import format_number as _n
from .models import (
    AggregationResult,
    ArcPath,
    Circle,
    LayoutResult,
    Primitive,
    Rect,
    TextLabel,
    UserStats,
)

CARD_PADDING_X = 25
CARD_PADDING_Y = 35
TITLE_HEIGHT = 30

DEFAULT_COLORS = {
    "title_color": "#2f80ed",
    "text_color": "#434d58",
    "bg_color": "#fffefe",
    "border_color": "#e4e2e2",
}


def _format_number(n: int) -> str:
    return f"{n:,}"


def _make_bar(share: float, width: int = 20) -> str:
    filled = round(share / 100 * width)
    return "█" * filled + "░" * (width - filled)


def _write_to_file(content: str, output_file: str) -> None:
    """Write content to a file and print confirmation."""
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(content)
    Console().print(f"Saved to {output_file}")


def render_primitive(primitive: Primitive) -> str:
    if isinstance(primitive, Rect):
        return (
            f'<rect data-testid="lang-progress" x="{_n(primitive.x)}" y="{_n(primitive.y)}" '
            f'width="{_n(primitive.width)}" height="{_n(primitive.height)}" '
            f'fill="{primitive.color}" rx="5"/>'
        )
    if isinstance(primitive, Circle):
        return (
            f'<circle cx="{_n(primitive.cx)}" cy="{_n(primitive.cy)}" r="{_n(primitive.r)}" '
            f'fill="{primitive.fill or "none"}" stroke="{primitive.stroke_color or "none"}" '
            f'stroke-width="{_n(primitive.stroke_width)}"/>'
        )
    if isinstance(primitive, ArcPath):
        return (
            f'<path data-testid="lang-doughnut" size="{_n(primitive.percent)}" d="{primitive.d}" '
            f'stroke="{primitive.stroke_color}" fill="none" '
            f'stroke-width="{_n(primitive.stroke_width)}"/>'
        )
    if isinstance(primitive, TextLabel):
        return (
            f'<text x="{_n(primitive.x)}" y="{_n(primitive.y)}" '
            f'class="{primitive.anchor_class}">{html.escape(primitive.content)}</text>'
        )
    raise TypeError(f"Unknown primitive: {primitive!r}")


def render_language_card(
    result: LayoutResult,
    title: str,
    hide_title: bool = False,
    hide_border: bool = False,
    colors: dict[str, str] | None = None,
) -> str:
    """Wrap laid out primitives in the card's SVG document."""
    colors = {**DEFAULT_COLORS, **(colors or {})}
    width = result.width
    height = result.height - TITLE_HEIGHT if hide_title else result.height
    body_y = CARD_PADDING_X if hide_title else CARD_PADDING_Y + 20

    header = ""
    if not hide_title:
        header = (
            f'<g transform="translate({CARD_PADDING_X}, {CARD_PADDING_Y})">'
            f'<text x="0" y="0" class="header">{html.escape(title)}</text></g>'
        )
    body = "\n      ".join(render_primitive(p) for p in result.primitives)

    return f"""<svg width="{_n(width)}" height="{_n(height)}" viewBox="0 0 {_n(width)} {_n(height)}" fill="none" xmlns="http://www.w3.org/2000/svg" role="img">
  <title>{html.escape(title)}</title>
  <style>
    .header {{ font: 600 18px 'Segoe UI', Ubuntu, Sans-Serif; fill: {colors["title_color"]} }}
    .lang-name {{ font: 400 11px 'Segoe UI', Ubuntu, Sans-Serif; fill: {colors["text_color"]} }}
  </style>
  <rect x="0.5" y="0.5" rx="4.5" height="99%" width="{_n(width - 1)}" stroke="{colors["border_color"]}" fill="{colors["bg_color"]}" stroke-opacity="{0 if hide_border else 1}"/>
  {header}
  <g transform="translate(0, {body_y})">
    <svg data-testid="lang-items" x="{CARD_PADDING_X}">
      {body}
    </svg>
  </g>
</svg>
"""


def render_report(
    stats: UserStats,
    aggregation: AggregationResult,
    output_file: str | None = None,
) -> None:
    """Render user stats and top languages to the terminal using rich."""
    if output_file:
        string_io = io.StringIO()
        console = Console(file=string_io, force_terminal=False, width=120)
    else:
        console = Console()

    console.print(Panel(
        Text(f"readme-cards: {stats.name}", justify="center"),
        style="bold cyan",
    ))
    console.print()

    console.print("[bold]Summary[/bold]")
    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("label", style="dim")
    summary.add_column("value", style="bold")
    summary.add_row("Total Stars", _format_number(stats.total_stars))
    summary.add_row("Total Commits", _format_number(stats.total_commits))
    summary.add_row("Total PRs", _format_number(stats.total_prs))
    summary.add_row("Total Issues", _format_number(stats.total_issues))
    summary.add_row("Contributed To", _format_number(stats.contributed_to))
    summary.add_row("Rank", f"{stats.rank.level} ({stats.rank.score:.2f})")
    console.print(summary)
    console.print()

    if aggregation.languages:
        console.print("[bold]Most Used Languages[/bold]")
        lang_table = Table(show_header=True, header_style="bold")
        lang_table.add_column("Language")
        lang_table.add_column("Bar")
        lang_table.add_column("Percentage", justify="right")
        lang_table.add_column("Bytes", justify="right")

        for lang in aggregation.languages:
            share = percentage(lang.size, aggregation.total_size)
            lang_table.add_row(
                lang.name,
                _make_bar(share),
                f"{share:.2f}%",
                _format_number(lang.size),
            )
        console.print(lang_table)
        console.print()

    if output_file:
        _write_to_file(string_io.getvalue(), output_file)


def render_json(
    stats: UserStats,
    aggregation: AggregationResult,
    output_file: str | None = None,
) -> None:
    """Render user stats and top languages as JSON."""
    content = json.dumps(
        {"stats": asdict(stats), "top_languages": asdict(aggregation)},
        indent=2,
        ensure_ascii=False,
    )
    if output_file:
        _write_to_file(content, output_file)
    else:
        print(content)


def render_svg(content: str, output_file: str | None = None) -> None:
    if output_file:
        _write_to_file(content, output_file)
    else:
        print(content, end="")
