"""Ordering of built result items."""

import locale
from typing import List, Sequence

from .models import ResultItem

SORTED_ALPHABETICALLY = "sorted_alphabetically"


def _stable_partition(items: Sequence[ResultItem], predicate) -> List[ResultItem]:
    first = [i for i in items if predicate(i)]
    rest = [i for i in items if not predicate(i)]
    return first + rest


class Ranker:
    """Orders items alphabetically or by type and context."""

    def __init__(self, display_order: str = ""):
        self.display_order = display_order

    def rank(self, items: Sequence[ResultItem]) -> List[ResultItem]:
        if self.display_order == SORTED_ALPHABETICALLY:
            return self.alphabetical(items)
        return self.by_priority(items)

    @staticmethod
    def alphabetical(items: Sequence[ResultItem]) -> List[ResultItem]:
        """Sort by title using the current locale, later windows first on ties."""
        by_window = sorted(items, key=lambda i: i.window_index, reverse=True)
        return sorted(by_window, key=lambda i: locale.strxfrm(i.record_title))

    @staticmethod
    def by_priority(items: Sequence[ResultItem]) -> List[ResultItem]:
        """
        Put spaces before tabs and, within each group, context matches first.

        Otherwise the incoming order is kept.
        """
        spaces = _stable_partition([i for i in items if i.is_space], lambda i: i.is_context_match)
        tabs = _stable_partition([i for i in items if not i.is_space], lambda i: i.is_context_match)
        return spaces + tabs
