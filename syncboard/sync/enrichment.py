"""
Enrichment policies for remote items.

The remote source carries no category or date, so new remote-derived
records get both from a policy. Policies are injected so reconciliation
stays reproducible.
"""

import datetime as dt
import random
from typing import Protocol, Sequence

from syncboard.core.models import CATEGORIES, DEFAULT_WINDOW_DAYS, RemoteItem


class EnrichmentPolicy(Protocol):
    def category(self, item: RemoteItem) -> str:
        ...

    def date(self, item: RemoteItem, now: dt.datetime) -> dt.date:
        ...


class RandomEnrichment:
    """
    Pseudo-random category and date, reproducible when seeded.

    Dates fall within the trailing window_days ending at now, so fresh
    records show up in the default dashboard window.
    """

    def __init__(
        self,
        seed: int | None = None,
        categories: Sequence[str] = CATEGORIES,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ):
        if not categories:
            raise ValueError("RandomEnrichment needs at least one category")
        if window_days < 0:
            raise ValueError("window_days must not be negative")
        self.categories = tuple(categories)
        self.window_days = window_days
        self._rng = random.Random(seed)

    def category(self, item: RemoteItem) -> str:
        return self._rng.choice(self.categories)

    def date(self, item: RemoteItem, now: dt.datetime) -> dt.date:
        return now.date() - dt.timedelta(days=self._rng.randint(0, self.window_days))


class FixedEnrichment:
    """Same category and date offset for every item."""

    def __init__(self, category: str = CATEGORIES[0], days_ago: int = 0):
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category}")
        self._category = category
        self.days_ago = days_ago

    def category(self, item: RemoteItem) -> str:
        return self._category

    def date(self, item: RemoteItem, now: dt.datetime) -> dt.date:
        return now.date() - dt.timedelta(days=self.days_ago)
