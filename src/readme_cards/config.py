"""Card options, clamped and validated at the boundary."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from .aggregator import DEFAULT_LANGS_COUNT, MAX_LANGS_COUNT, MIN_LANGS_COUNT
from .errors import InputError
from .layout import Layout

DEFAULT_CARD_WIDTH = 300
MIN_CARD_WIDTH = 230


def clamp_value(number: float, lo: float, hi: float) -> float:
    return max(lo, min(number, hi))


def parse_list(values: str | Iterable[str] | None) -> list[str]:
    """Split comma separated values, accepting one string or several."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    items = []
    for value in values:
        items += [item.strip() for item in value.split(",") if item.strip()]
    return items


def _as_number(name: str, value: object) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InputError(f"{name} must be a number, got {value!r}") from None


@dataclass
class CardOptions:
    langs_count: int = DEFAULT_LANGS_COUNT
    hide: list[str] = field(default_factory=list)
    exclude_repo: list[str] = field(default_factory=list)
    layout: Layout = Layout.NORMAL
    card_width: float = DEFAULT_CARD_WIDTH
    count_private: bool = False
    include_all_commits: bool = False
    locale: str | None = None
    hide_title: bool = False
    hide_border: bool = False
    custom_title: str | None = None

    @classmethod
    def from_raw(
        cls,
        langs_count: object = DEFAULT_LANGS_COUNT,
        hide: str | Iterable[str] | None = None,
        exclude_repo: str | Iterable[str] | None = None,
        layout: str | None = None,
        card_width: object = None,
        **flags,
    ) -> CardOptions:
        count = _as_number("langs_count", langs_count)
        if not math.isfinite(count):
            raise InputError(f"langs_count must be a finite number, got {count}")
        width = DEFAULT_CARD_WIDTH if card_width is None else _as_number("card_width", card_width)
        if not math.isfinite(width):
            width = DEFAULT_CARD_WIDTH
        return cls(
            langs_count=int(clamp_value(int(count), MIN_LANGS_COUNT, MAX_LANGS_COUNT)),
            hide=parse_list(hide),
            exclude_repo=parse_list(exclude_repo),
            layout=Layout.parse(layout),
            card_width=max(width, MIN_CARD_WIDTH),
            **flags,
        )
