"""
Precedence Table

Specificity category -> integer rank, read once from the lane store.
Lower rank = more specific = wins when one carrier has several matching lanes.
"""

from types import MappingProxyType
from typing import Iterable, Mapping

import polars as pl

from .errors import ClassificationError


# =============================================================================
# CATEGORY NAMES (as stored in the precedence table)
# =============================================================================

CITY_STATE_TO_CITY_STATE = "CITY,ST TO CITY,ST"
ZIP6_TO_ZIP6 = "ZIP(6) TO ZIP(6)"
ZIP6_TO_ZIP3 = "ZIP(6) TO ZIP(3)"
ZIP3_TO_ZIP6 = "ZIP(3) TO ZIP(6)"
ZIP3_TO_CITY_STATE = "ZIP(3) TO CITY,ST"
CITY_STATE_TO_ZIP3 = "CITY,ST TO ZIP(3)"
CITY_STATE_TO_STATE = "CITY,ST TO ST"
STATE_TO_CITY_STATE = "ST TO CITY,ST"
STATE_TO_ZIP6 = "ST TO ZIP(6)"
STATE_TO_ZIP3 = "ST TO ZIP(3)"
ZIP3_TO_STATE = "ZIP(3) TO ST"
STATE_TO_STATE = "ST TO ST"
STATE_ZIP3_TO_STATE_ZIP3 = "ST,ZIP(3) TO ST,ZIP(3)"
MILEAGE = "MILEAGE"

ALL_CATEGORIES = (
    CITY_STATE_TO_CITY_STATE,
    ZIP6_TO_ZIP6,
    ZIP6_TO_ZIP3,
    ZIP3_TO_ZIP6,
    ZIP3_TO_CITY_STATE,
    CITY_STATE_TO_ZIP3,
    CITY_STATE_TO_STATE,
    STATE_TO_CITY_STATE,
    STATE_TO_ZIP6,
    STATE_TO_ZIP3,
    ZIP3_TO_STATE,
    STATE_TO_STATE,
    STATE_ZIP3_TO_STATE_ZIP3,
    MILEAGE,
)


class PrecedenceTable:
    """
    Immutable category -> rank mapping.

    Built once at startup and passed into the pipeline; refreshing it means
    building a new table (process restart in production).
    """

    __slots__ = ("_ranks",)

    def __init__(self, ranks: Mapping[str, int]):
        self._ranks = MappingProxyType({name.strip(): int(rank) for name, rank in ranks.items()})

    @classmethod
    def from_frame(cls, df: pl.DataFrame) -> "PrecedenceTable":
        """Build from a frame with "category" and "rank" columns."""
        return cls(dict(zip(df["category"].to_list(), df["rank"].to_list())))

    @property
    def ranks(self) -> Mapping[str, int]:
        return self._ranks

    def rank(self, category: str) -> int:
        """
        Rank of one category.

        Raises:
            ClassificationError: If the category is not in the table
        """
        try:
            return self._ranks[category]
        except KeyError:
            raise ClassificationError(f"Precedence category '{category}' not found in precedence table")

    def ranks_for(self, categories: Iterable[str]) -> list[int]:
        """Ranks for several categories, in the order given."""
        return [self.rank(c) for c in categories]

    def category_of(self, rank: int) -> str | None:
        """Reverse lookup, None if no category carries the rank."""
        for name, value in self._ranks.items():
            if value == rank:
                return name
        return None

    def __contains__(self, category: str) -> bool:
        return category in self._ranks

    def __len__(self) -> int:
        return len(self._ranks)

    def __repr__(self) -> str:
        return f"PrecedenceTable({dict(self._ranks)!r})"
