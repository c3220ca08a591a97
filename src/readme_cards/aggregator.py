"""Merge per-repository language sizes into the top languages of a user."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable

from .models import AggregationResult, Language, Repository

logger = logging.getLogger(__name__)

DEFAULT_LANGS_COUNT = 5
MIN_LANGS_COUNT = 1
MAX_LANGS_COUNT = 10


def lowercase_trim(name: str) -> str:
    return name.strip().lower()


def clamp_langs_count(langs_count: int) -> int:
    return max(MIN_LANGS_COUNT, min(MAX_LANGS_COUNT, int(langs_count)))


def percentage(size: float, total: float) -> float:
    """Share of ``size`` in ``total`` in percent, 0 for an empty total."""
    if not total:
        return 0.0
    return size / total * 100


def _glob_to_regex(pattern: str) -> str:
    return ".*".join(re.escape(part) for part in pattern.split("*"))


def create_matcher(pattern: str) -> Callable[[str], bool]:
    """Return a predicate matching repository names against a ``*`` glob."""
    regex = re.compile(_glob_to_regex(pattern))
    return lambda repo_name: regex.fullmatch(repo_name) is not None


def filter_repositories(
    repos: Iterable[Repository],
    exclude_repo: Iterable[str] = (),
) -> list[Repository]:
    matchers = [create_matcher(pattern) for pattern in exclude_repo]
    kept = []
    for repo in repos:
        if any(matches(repo.name) for matches in matchers):
            logger.debug("Excluding repository %s", repo.name)
            continue
        kept.append(repo)
    return kept


def merge_languages(repos: Iterable[Repository]) -> list[Language]:
    """Sum language sizes across repositories, in first-seen order."""
    merged: dict[str, Language] = {}
    for repo in repos:
        for lang in repo.languages:
            key = lowercase_trim(lang.name)
            existing = merged.get(key)
            if existing is None:
                merged[key] = Language(name=lang.name, size=lang.size, color=lang.color)
                continue
            existing.size += lang.size
            if lang.color:
                existing.color = lang.color
    return list(merged.values())


def _top(languages: list[Language], langs_count: int) -> AggregationResult:
    top = sorted(languages, key=lambda lang: lang.size, reverse=True)
    top = top[: clamp_langs_count(langs_count)]
    return AggregationResult(languages=top, total_size=sum(lang.size for lang in top))


def aggregate_languages(
    repos: Iterable[Repository],
    exclude_repo: Iterable[str] = (),
    langs_count: int = DEFAULT_LANGS_COUNT,
) -> AggregationResult:
    """Aggregate repositories into the ``langs_count`` largest languages.

    Repositories matching any ``exclude_repo`` glob are dropped before their
    languages are merged. ``total_size`` only covers the kept languages.
    """
    kept = filter_repositories(repos, exclude_repo)
    return _top(merge_languages(kept), langs_count)


def trim_top_languages(
    languages: Iterable[Language],
    hide: Iterable[str] = (),
    langs_count: int = DEFAULT_LANGS_COUNT,
) -> AggregationResult:
    """Drop hidden languages and keep the ``langs_count`` largest."""
    hidden = {lowercase_trim(name) for name in hide}
    visible = [lang for lang in languages if lowercase_trim(lang.name) not in hidden]
    return _top(visible, langs_count)
