"""Query matching for tab records and built result items."""

from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from .models import ResultItem, TabRecord
from .utils.text import normalize


class SearchMethod(str, Enum):
    """Available match strategies."""
    SUBSTRING = "substring"
    TOKENIZED = "tokenized"


class MatchEngine:
    """
    Decides whether a record or item matches a query.

    Only the title is Unicode-normalized before comparison; URL, subtitle and
    space title are compared as plain lowercased text.
    """

    def __init__(self, method: SearchMethod = SearchMethod.TOKENIZED):
        self.method = SearchMethod(method)

    def matches(self, query: str, title: str, other_fields: Iterable[str] = ()) -> bool:
        """
        Match a query against a title and the other searchable fields.

        Args:
            query: Search query (already normalized)
            title: Title of the record or item
            other_fields: Remaining searchable fields (url, subtitle, space title)

        Returns:
            True if the query matches under the configured method
        """
        fields = [normalize(title).lower()]
        fields.extend(f.lower() for f in other_fields if f)

        query = query.lower()
        if self.method is SearchMethod.TOKENIZED:
            tokens = query.split()
            return all(any(token in f for f in fields) for token in tokens)
        return any(query in f for f in fields)

    def matches_record(self, record: TabRecord, query: str, subtitles: Iterable[str] = ()) -> bool:
        """
        Match against the static fields of a collected record.

        Args:
            record: Collected record
            query: Search query (already normalized)
            subtitles: Every subtitle the record could be displayed with, so
                tokens found only in the composed subtitle keep the record

        Returns:
            True if the record may match once built
        """
        return self.matches(query, record.title, [*record.searchable_fields(), *subtitles])

    def matches_item(self, item: ResultItem, query: str) -> bool:
        """Match against a built item, including its composed subtitle."""
        return self.matches(query, item.record_title, [item.subtitle])

    def filter_records(
        self,
        records: Sequence[TabRecord],
        query: str,
        subtitles: Optional[Callable[[TabRecord], Iterable[str]]] = None,
    ) -> List[TabRecord]:
        return [r for r in records if self.matches_record(r, query, subtitles(r) if subtitles else ())]

    def filter_items(self, items: Sequence[ResultItem], query: str) -> List[ResultItem]:
        return [i for i in items if self.matches_item(i, query)]
