"""Layouts of the top languages card.

Each layout turns the trimmed languages into drawing primitives positioned
inside the card body, plus the card height it needs.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from enum import Enum

from .aggregator import percentage
from .geometry import describe_arc
from .models import ArcPath, Circle, Language, LayoutResult, Primitive, Rect, TextLabel

DEFAULT_LANG_COLOR = "#858585"
PROGRESS_TRACK_COLOR = "#ddd"
LAYOUT_PADDING = 50
PROGRESS_PADDING_RIGHT = 95
PROGRESS_HEIGHT = 8
MIN_SEGMENT_WIDTH = 10
NORMAL_ROW_GAP = 40
COMPACT_ROW_GAP = 25
COMPACT_MIN_COLUMN_GAP = 150
DOUGHNUT_ROW_GAP = 32
DOUGHNUT_OFFSET_X = 125
DOUGHNUT_STROKE_WIDTH = 12
LABEL_FONT_SIZE = 11

# Helvetica advance widths per 1px of font size.
_CHAR_WIDTHS = {
    " ": 0.278, "%": 0.889, ".": 0.278, ",": 0.278, "-": 0.333, "_": 0.556,
    "+": 0.584, "#": 0.556, "(": 0.333, ")": 0.333, "/": 0.278,
    "0": 0.556, "1": 0.556, "2": 0.556, "3": 0.556, "4": 0.556,
    "5": 0.556, "6": 0.556, "7": 0.556, "8": 0.556, "9": 0.556,
    "a": 0.556, "b": 0.556, "c": 0.5, "d": 0.556, "e": 0.556, "f": 0.278,
    "g": 0.556, "h": 0.556, "i": 0.222, "j": 0.222, "k": 0.5, "l": 0.222,
    "m": 0.833, "n": 0.556, "o": 0.556, "p": 0.556, "q": 0.556, "r": 0.333,
    "s": 0.5, "t": 0.278, "u": 0.556, "v": 0.5, "w": 0.722, "x": 0.5,
    "y": 0.5, "z": 0.5,
    "A": 0.667, "B": 0.667, "C": 0.722, "D": 0.722, "E": 0.667, "F": 0.611,
    "G": 0.778, "H": 0.722, "I": 0.278, "J": 0.5, "K": 0.667, "L": 0.556,
    "M": 0.833, "N": 0.722, "O": 0.778, "P": 0.667, "Q": 0.778, "R": 0.722,
    "S": 0.667, "T": 0.611, "U": 0.722, "V": 0.667, "W": 0.944, "X": 0.667,
    "Y": 0.667, "Z": 0.611,
}
_AVG_CHAR_WIDTH = 0.5279


class Layout(str, Enum):
    NORMAL = "normal"
    COMPACT = "compact"
    PIE = "pie"

    @classmethod
    def parse(cls, value: str | Layout | None) -> Layout:
        """Case-insensitive lookup; anything unknown is the normal layout."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.NORMAL


def measure_text(text: str, font_size: float = 10) -> float:
    return sum(_CHAR_WIDTHS.get(ch, _AVG_CHAR_WIDTH) for ch in text) * font_size


def calculate_normal_layout_height(total_langs: int) -> int:
    return 45 + (total_langs + 1) * NORMAL_ROW_GAP


def calculate_compact_layout_height(total_langs: int) -> int:
    # x.5 rounds up
    return 90 + math.floor(total_langs / 2 + 0.5) * COMPACT_ROW_GAP


def calculate_pie_layout_height(total_langs: int) -> int:
    return 215 + max(total_langs - 5, 0) * 32


def doughnut_center_translation(total_langs: int) -> int:
    return -45 + max(total_langs - 5, 0) * 16


def _color(lang: Language) -> str:
    return lang.color or DEFAULT_LANG_COLOR


def _legend_label(lang: Language, total_size: float) -> str:
    return f"{lang.name} {percentage(lang.size, total_size):.2f}%"


def _legend_item(x: float, y: float, lang: Language, total_size: float) -> list[Primitive]:
    return [
        Circle(cx=x + 5, cy=y + 6, r=5, fill=_color(lang)),
        TextLabel(x=x + 15, y=y + 10, content=_legend_label(lang, total_size)),
    ]


def render_normal_layout(
    languages: Sequence[Language], width: float, total_size: float
) -> list[Primitive]:
    """One labelled progress bar per language, stacked vertically."""
    progress_width = width - PROGRESS_PADDING_RIGHT
    primitives: list[Primitive] = []
    for index, lang in enumerate(languages):
        y = index * NORMAL_ROW_GAP
        fill_width = lang.size / total_size * progress_width if total_size else 0
        primitives += [
            TextLabel(x=2, y=y + 15, content=lang.name),
            TextLabel(
                x=progress_width + 10,
                y=y + 34,
                content=f"{percentage(lang.size, total_size):.2f}%",
            ),
            Rect(x=0, y=y + 25, width=progress_width, height=PROGRESS_HEIGHT,
                 color=PROGRESS_TRACK_COLOR),
            Rect(x=0, y=y + 25, width=fill_width, height=PROGRESS_HEIGHT, color=_color(lang)),
        ]
    return primitives


def compact_segments(
    languages: Sequence[Language], width: float, total_size: float
) -> list[Rect]:
    """Stacked bar segments.

    Segments are placed by their true share of ``width - LAYOUT_PADDING``;
    slivers are drawn at least ``MIN_SEGMENT_WIDTH`` wide so they stay visible.
    """
    offset_width = width - LAYOUT_PADDING
    progress_offset = 0.0
    segments = []
    for lang in languages:
        share = round(lang.size / total_size * offset_width, 2) if total_size else 0.0
        segments.append(
            Rect(
                x=progress_offset,
                y=0,
                width=max(share, MIN_SEGMENT_WIDTH),
                height=PROGRESS_HEIGHT,
                color=_color(lang),
            )
        )
        progress_offset += share
    return segments


def render_compact_layout(
    languages: Sequence[Language], width: float, total_size: float
) -> list[Primitive]:
    """Stacked bar on top of a two-column legend."""
    primitives: list[Primitive] = list(compact_segments(languages, width, total_size))
    if not languages:
        return primitives

    longest = max(languages, key=lambda lang: len(lang.name))
    column_gap = max(
        COMPACT_MIN_COLUMN_GAP,
        20 + measure_text(_legend_label(longest, total_size), LABEL_FONT_SIZE),
    )
    split = math.ceil(len(languages) / 2)
    columns = (languages[:split], languages[split:])
    for column_index, column in enumerate(columns):
        for row, lang in enumerate(column):
            primitives += _legend_item(
                column_index * column_gap, COMPACT_ROW_GAP + row * COMPACT_ROW_GAP, lang, total_size
            )
    return primitives


def doughnut_segments(percentages: Sequence[float]) -> list[tuple[float, float, float]]:
    """Split the ring into ``(percent, start_angle, end_angle)`` segments.

    Percentages are renormalized to their own sum and rounded to two places.
    """
    total_percent = sum(percentages)
    if not total_percent:
        return []
    segments = []
    start_angle = 0.0
    for value in percentages:
        percent = round(value / total_percent * 100, 2)
        end_angle = 3.6 * percent + start_angle
        segments.append((percent, start_angle, end_angle))
        start_angle = end_angle
    return segments


def render_doughnut_layout(
    languages: Sequence[Language], width: float, total_size: float
) -> list[Primitive]:
    """Legend column on the left, doughnut ring on the right."""
    primitives: list[Primitive] = []
    for row, lang in enumerate(languages):
        primitives += _legend_item(0, row * DOUGHNUT_ROW_GAP, lang, total_size)

    center = width / 3
    radius = center - 60
    cx = DOUGHNUT_OFFSET_X + center
    cy = doughnut_center_translation(len(languages)) + center

    percentages = [round(percentage(lang.size, total_size), 2) for lang in languages]
    segments = doughnut_segments(percentages)
    full = next(
        (lang for lang, (percent, _, _) in zip(languages, segments) if percent >= 100), None
    )
    if len(languages) == 1 or full is not None:
        # An arc whose ends coincide draws nothing.
        primitives.append(
            Circle(
                cx=cx,
                cy=cy,
                r=radius,
                stroke_color=_color(full or languages[0]),
                stroke_width=DOUGHNUT_STROKE_WIDTH,
            )
        )
        return primitives

    for lang, (percent, start_angle, end_angle) in zip(languages, segments):
        d, _ = describe_arc(cx, cy, radius, start_angle, end_angle)
        primitives.append(
            ArcPath(
                d=d,
                stroke_color=_color(lang),
                stroke_width=DOUGHNUT_STROKE_WIDTH,
                percent=percent,
            )
        )
    return primitives


_Renderer = Callable[[Sequence[Language], float, float], list[Primitive]]

_LAYOUTS: dict[Layout, tuple[_Renderer, Callable[[int], int], int]] = {
    Layout.NORMAL: (render_normal_layout, calculate_normal_layout_height, 0),
    Layout.COMPACT: (render_compact_layout, calculate_compact_layout_height, LAYOUT_PADDING),
    Layout.PIE: (render_doughnut_layout, calculate_pie_layout_height, LAYOUT_PADDING),
}


def layout_languages(
    layout: Layout | str | None,
    languages: Sequence[Language],
    total_size: float,
    width: float,
) -> LayoutResult:
    """Lay out ``languages`` for a card ``width`` wide.

    The compact and pie layouts widen the card by ``LAYOUT_PADDING`` before
    computing their geometry.
    """
    render, height_for, padding = _LAYOUTS[Layout.parse(layout)]
    width = width + padding
    return LayoutResult(
        primitives=render(languages, width, total_size),
        height=height_for(len(languages)),
        width=width,
    )
