"""Exception types raised by readme-cards."""

from __future__ import annotations


class CardError(Exception):
    """Base class for errors surfaced to the caller."""


class InputError(CardError):
    """Missing or invalid identifying input, such as an absent username."""


class UpstreamError(CardError):
    """The GitHub API reported a failure for the query."""
