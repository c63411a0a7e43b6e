"""Quota tracking for collected resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class Quota:
    """A target quantity and the amount accumulated towards it.

    A quota with ``category=None`` is a wildcard that accepts reports for
    any category.
    """

    name: str
    target: int
    category: str | None = None
    accumulated: int = 0

    @property
    def is_wildcard(self) -> bool:
        return self.category is None

    @property
    def is_met(self) -> bool:
        return self.accumulated >= self.target

    @property
    def progress(self) -> float:
        """Fraction of the target reached, capped at 1.0."""
        if self.target <= 0:
            return 1.0
        return min(1.0, self.accumulated / self.target)

    def accepts(self, category: str) -> bool:
        return self.category is None or self.category == category


class CompletionTracker:
    """Holds quotas and reports whether any of them has been met.

    Accumulation only ever grows: there is no way to remove a quota or
    decrease its accumulated quantity.

    Example:
        >>> tracker = CompletionTracker()
        >>> tracker.add_quota(Quota(name="wood", target=20, category="tree"))
        >>> tracker.report("tree", 5)
        5
        >>> tracker.is_any_met()
        False
    """

    def __init__(self, quotas: list[Quota] | None = None) -> None:
        self._quotas: dict[str, Quota] = {}
        for quota in quotas or []:
            self.add_quota(quota)

    def add_quota(self, quota: Quota) -> None:
        """Register a quota.

        Raises:
            ValueError: If a quota with the same name exists or the target is negative.
        """
        if quota.name in self._quotas:
            raise ValueError(f"Quota already registered: {quota.name}")
        if quota.target < 0:
            raise ValueError(f"Quota target must be non-negative: {quota.target}")
        self._quotas[quota.name] = quota

    def report(self, category: str, amount: int) -> int:
        """Add ``amount`` to every quota that accepts ``category``.

        Returns:
            Number of quotas that were credited.

        Raises:
            ValueError: If ``amount`` is negative.
        """
        if amount < 0:
            raise ValueError(f"Reported amount must be non-negative: {amount}")
        credited = 0
        for quota in self._quotas.values():
            if quota.accepts(category):
                quota.accumulated += amount
                credited += 1
        if credited == 0:
            logger.debug("No quota accepts category %s; %d units not counted", category, amount)
        return credited

    def is_any_met(self) -> bool:
        """True iff at least one quota has reached its target."""
        return any(q.is_met for q in self._quotas.values())

    def completed_count(self) -> int:
        """Number of quotas that have reached their target."""
        return sum(1 for q in self._quotas.values() if q.is_met)

    def get_quota(self, name: str) -> Quota | None:
        return self._quotas.get(name)

    @property
    def quotas(self) -> list[Quota]:
        return list(self._quotas.values())

    def progress(self) -> dict[str, float]:
        """Progress fraction per quota name."""
        return {name: q.progress for name, q in self._quotas.items()}
