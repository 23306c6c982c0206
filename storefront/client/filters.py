"""
Filter state for the restaurant listing.

The "type" filter is a tagged value rather than a bare string: it is either
no filter, a diet filter (veg / non-veg), or a menu-category filter. UI
labels ("all", "Veg", "Non-Veg", "<category>") convert to and from it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from storefront.client.models import MenuItem

ALL = "all"
VEG_LABEL = "Veg"
NON_VEG_LABEL = "Non-Veg"


class TypeFilterKind(str, enum.Enum):
    ALL = "all"
    VEG = "veg"
    NON_VEG = "non_veg"
    CATEGORY = "category"


@dataclass(frozen=True)
class TypeFilter:
    kind: TypeFilterKind = TypeFilterKind.ALL
    category: Optional[str] = None

    @classmethod
    def from_label(cls, label: Optional[str]) -> TypeFilter:
        """Parse a UI label; empty or ``"all"`` means no filter."""
        if not label or label == ALL:
            return cls()
        if label == VEG_LABEL:
            return cls(TypeFilterKind.VEG)
        if label == NON_VEG_LABEL:
            return cls(TypeFilterKind.NON_VEG)
        return cls(TypeFilterKind.CATEGORY, label)

    @property
    def label(self) -> str:
        if self.kind is TypeFilterKind.VEG:
            return VEG_LABEL
        if self.kind is TypeFilterKind.NON_VEG:
            return NON_VEG_LABEL
        if self.kind is TypeFilterKind.CATEGORY:
            return self.category
        return ALL

    @property
    def is_all(self) -> bool:
        return self.kind is TypeFilterKind.ALL

    def matches(self, item: MenuItem) -> bool:
        if self.kind is TypeFilterKind.VEG:
            return item.veg
        if self.kind is TypeFilterKind.NON_VEG:
            return not item.veg
        if self.kind is TypeFilterKind.CATEGORY:
            return item.category == self.category
        return True


ANY_TYPE = TypeFilter()


class FilterMode(str, enum.Enum):
    """Which single predicate family decides restaurant inclusion."""

    SEARCH = "search"
    CUISINE = "cuisine"
    TYPE = "type"
    NONE = "none"


@dataclass
class FilterState:
    cuisine: str = ALL
    type_filter: TypeFilter = field(default_factory=TypeFilter)
    search_term: str = ""

    @property
    def mode(self) -> FilterMode:
        """Active predicate family: search, then cuisine, then type."""
        if self.search_term.strip():
            return FilterMode.SEARCH
        if self.cuisine != ALL:
            return FilterMode.CUISINE
        if not self.type_filter.is_all:
            return FilterMode.TYPE
        return FilterMode.NONE
