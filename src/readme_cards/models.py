"""Data models for readme-cards."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Language:
    name: str
    size: int
    color: str | None = None


@dataclass
class Repository:
    name: str
    languages: list[Language] = field(default_factory=list)
    stargazers: int = 0


@dataclass
class AggregationResult:
    languages: list[Language] = field(default_factory=list)
    total_size: int = 0


@dataclass
class ActivityCounters:
    total_repos: float = 0
    total_commits: float = 0
    contributions: float = 0
    followers: float = 0
    prs: float = 0
    issues: float = 0
    stargazers: float = 0


@dataclass
class RankResult:
    level: str
    score: float


@dataclass
class UserStats:
    name: str
    total_prs: int = 0
    total_commits: int = 0
    total_issues: int = 0
    total_stars: int = 0
    contributed_to: int = 0
    rank: RankResult = field(default_factory=lambda: RankResult(level="C", score=0))
    primary_languages: list[Language] = field(default_factory=list)


# Layout primitives. Coordinates are relative to the card body.


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    stroke_color: str | None = None
    stroke_width: float = 0
    fill: str | None = None


@dataclass(frozen=True)
class ArcPath:
    d: str
    stroke_color: str
    stroke_width: float
    percent: float


@dataclass(frozen=True)
class TextLabel:
    x: float
    y: float
    content: str
    anchor_class: str = "lang-name"


Primitive = Rect | Circle | ArcPath | TextLabel


@dataclass
class LayoutResult:
    primitives: list[Primitive] = field(default_factory=list)
    height: float = 0
    width: float = 0
