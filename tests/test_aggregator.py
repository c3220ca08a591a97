"""Tests for the aggregator module."""

from __future__ import annotations

import pytest

from readme_cards.aggregator import (
    aggregate_languages,
    clamp_langs_count,
    create_matcher,
    filter_repositories,
    merge_languages,
    percentage,
    trim_top_languages,
)
from readme_cards.models import Language, Repository


@pytest.fixture
def repos():
    return [
        Repository(
            name="web-app",
            languages=[
                Language(name="TypeScript", size=700, color="#3178c6"),
                Language(name="CSS", size=50, color="#563d7c"),
            ],
        ),
        Repository(
            name="scripts",
            languages=[
                Language(name="Python", size=400, color="#3572A5"),
                Language(name="TypeScript", size=100, color="#3178c6"),
            ],
        ),
        Repository(
            name="dotfiles",
            languages=[Language(name="Shell", size=900, color="#89e051")],
        ),
    ]


def test_merge_sums_sizes_across_repositories(repos):
    merged = merge_languages(repos)
    sizes = {lang.name: lang.size for lang in merged}
    assert sizes == {"TypeScript": 800, "CSS": 50, "Python": 400, "Shell": 900}
    # first seen order
    assert [lang.name for lang in merged] == ["TypeScript", "CSS", "Python", "Shell"]


def test_merge_is_case_insensitive_and_trimmed():
    merged = merge_languages([
        Repository(name="a", languages=[Language(name="Python", size=10)]),
        Repository(name="b", languages=[Language(name=" python ", size=5, color="#3572A5")]),
    ])
    assert len(merged) == 1
    assert merged[0].name == "Python"
    assert merged[0].size == 15
    assert merged[0].color == "#3572A5"


def test_merge_does_not_mutate_input(repos):
    merge_languages(repos)
    assert repos[0].languages[0].size == 700


def test_aggregate_sorts_and_totals(repos):
    result = aggregate_languages(repos, langs_count=10)
    assert [lang.name for lang in result.languages] == ["Shell", "TypeScript", "Python", "CSS"]
    assert result.total_size == 2150
    assert result.total_size == sum(lang.size for lang in result.languages)


def test_aggregate_total_covers_truncated_list_only(repos):
    result = aggregate_languages(repos, langs_count=2)
    assert [lang.name for lang in result.languages] == ["Shell", "TypeScript"]
    assert result.total_size == 1700


@pytest.mark.parametrize("requested, expected", [(0, 1), (-3, 1), (1, 1), (5, 5), (10, 10), (50, 10)])
def test_langs_count_is_clamped(requested, expected):
    assert clamp_langs_count(requested) == expected


def test_aggregate_never_exceeds_ten_languages():
    repo = Repository(
        name="polyglot",
        languages=[Language(name=f"Lang{i}", size=i + 1) for i in range(15)],
    )
    result = aggregate_languages([repo], langs_count=99)
    assert len(result.languages) == 10
    assert result.languages[0].name == "Lang14"
    assert result.total_size == sum(lang.size for lang in result.languages)


def test_aggregate_ties_keep_input_order():
    repo = Repository(
        name="r",
        languages=[Language(name="Go", size=10), Language(name="Rust", size=10), Language(name="C", size=20)],
    )
    result = aggregate_languages([repo])
    assert [lang.name for lang in result.languages] == ["C", "Go", "Rust"]


def test_aggregate_empty_input():
    result = aggregate_languages([])
    assert result.languages == []
    assert result.total_size == 0


def test_aggregate_is_idempotent(repos):
    first = aggregate_languages(repos, langs_count=10)
    again = aggregate_languages([Repository(name="merged", languages=first.languages)], langs_count=10)
    assert [(lang.name, lang.size) for lang in again.languages] == [
        (lang.name, lang.size) for lang in first.languages
    ]
    assert again.total_size == first.total_size


def test_exclude_exact_repository_name(repos):
    result = aggregate_languages(repos, exclude_repo=["dotfiles"], langs_count=10)
    assert "Shell" not in [lang.name for lang in result.languages]
    assert result.total_size == 1250


def test_exclude_glob_drops_whole_repository(repos):
    result = aggregate_languages(repos, exclude_repo=["web-*"], langs_count=10)
    sizes = {lang.name: lang.size for lang in result.languages}
    assert sizes["TypeScript"] == 100
    assert "CSS" not in sizes


def test_create_matcher_glob():
    matches = create_matcher("foo*")
    assert matches("foobar")
    assert matches("foo")
    assert not matches("barfoo")
    assert create_matcher("*foo")("barfoo")
    assert create_matcher("a*c")("abbbc")


def test_create_matcher_escapes_regex_metacharacters():
    matches = create_matcher("my.repo")
    assert matches("my.repo")
    assert not matches("myXrepo")
    assert create_matcher("c++")("c++")
    assert create_matcher("(x)")("(x)")


def test_filter_repositories_without_patterns(repos):
    assert filter_repositories(repos) == repos


def test_trim_hides_languages_case_insensitively(repos):
    languages = aggregate_languages(repos, langs_count=10).languages
    result = trim_top_languages(languages, hide=["  shell", "css "], langs_count=5)
    assert [lang.name for lang in result.languages] == ["TypeScript", "Python"]
    assert result.total_size == 1200


def test_trim_truncates_after_hiding(repos):
    languages = aggregate_languages(repos, langs_count=10).languages
    result = trim_top_languages(languages, hide=["Shell"], langs_count=2)
    assert [lang.name for lang in result.languages] == ["TypeScript", "Python"]


def test_percentage_handles_zero_total():
    assert percentage(0, 0) == 0.0
    assert percentage(5, 0) == 0.0
    assert percentage(25, 100) == 25.0
