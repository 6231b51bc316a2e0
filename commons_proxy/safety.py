"""Keyword based safe search filtering."""

from typing import Iterable

from commons_proxy.config import DEFAULT_BLACKLIST
from commons_proxy.models import NormalizedResult, SafeSearch


class SafeSearchFilter:
    """
    Reject results whose title or description mentions a blacklisted term.

    Matching is plain case-insensitive substring containment, so a term
    also matches inside longer words ("sex" rejects "Sexton House").
    Only the exact mode ``"Strict"`` filters; every other value, including
    unknown ones, lets results through.
    """

    def __init__(self, blacklist: Iterable[str] = DEFAULT_BLACKLIST):
        self.blacklist = tuple(term.lower() for term in blacklist if term)

    def matches(self, result: NormalizedResult) -> bool:
        """Return True if the result text contains a blacklisted term."""
        text = f"{result.title or ''} {result.description or ''}".lower()
        return any(term in text for term in self.blacklist)

    def allows(self, result: NormalizedResult, mode: str = SafeSearch.STRICT.value) -> bool:
        if mode != SafeSearch.STRICT.value:
            return True
        return not self.matches(result)

    def apply(
        self, results: Iterable[NormalizedResult], mode: str = SafeSearch.STRICT.value
    ) -> list[NormalizedResult]:
        return [r for r in results if self.allows(r, mode)]
