"""Percentile rank of a user's activity counters."""

from __future__ import annotations

import math
from dataclasses import astuple

from .models import ActivityCounters, RankResult

COMMITS_OFFSET = 1.65
CONTRIBS_OFFSET = 1.65
ISSUES_OFFSET = 1
STARS_OFFSET = 0.75
PRS_OFFSET = 0.5
FOLLOWERS_OFFSET = 0.45
REPO_OFFSET = 1

ALL_OFFSETS = (
    CONTRIBS_OFFSET
    + ISSUES_OFFSET
    + STARS_OFFSET
    + PRS_OFFSET
    + FOLLOWERS_OFFSET
    + REPO_OFFSET
)

RANK_S_VALUE = 1
RANK_DOUBLE_A_VALUE = 25
RANK_A2_VALUE = 45
RANK_A3_VALUE = 60
RANK_B_VALUE = 150

TOTAL_VALUES = RANK_S_VALUE + RANK_A2_VALUE + RANK_A3_VALUE + RANK_B_VALUE

# Upper bounds, checked in order.
_LEVELS = (
    (RANK_S_VALUE, "S+"),
    (RANK_DOUBLE_A_VALUE, "S"),
    (RANK_A2_VALUE, "A++"),
    (RANK_A3_VALUE, "A+"),
    (RANK_B_VALUE, "B+"),
)
LOWEST_LEVEL = "C"


def normal_cdf(mean: float, sigma: float, to: float) -> float:
    """Rational approximation of the normal CDF, shifted into (0, 2).

    The grade thresholds are tuned against this exact shape.
    """
    z = (to - mean) / math.sqrt(2 * sigma * sigma)
    t = 1.0 / (1.35 + 0.47047 * abs(z))
    poly = t * (0.3480242 + t * (-0.0958798 + t * 0.7478556))
    ans = 1.0 - poly * math.exp(-z * z)
    sign = -1 if z < 0 else 1
    return 1 + sign * ans


def level_for_score(score: float) -> str:
    for upper, level in _LEVELS:
        if score < upper:
            return level
    return LOWEST_LEVEL


def calculate_rank(counters: ActivityCounters) -> RankResult:
    """Weight the counters, normalize them and map the result to a grade.

    A lower score is a rarer, better grade.
    """
    if any(value < 0 for value in astuple(counters)):
        raise ValueError(f"Activity counters must be non-negative: {counters}")

    score = (
        counters.total_commits * COMMITS_OFFSET
        + counters.contributions * CONTRIBS_OFFSET
        + counters.issues * ISSUES_OFFSET
        + counters.stargazers * STARS_OFFSET
        + counters.prs * PRS_OFFSET
        + counters.followers * FOLLOWERS_OFFSET
        + counters.total_repos * REPO_OFFSET
    ) / 100

    normalized_score = normal_cdf(score, TOTAL_VALUES, ALL_OFFSETS) * 100

    return RankResult(level=level_for_score(normalized_score), score=normalized_score)
