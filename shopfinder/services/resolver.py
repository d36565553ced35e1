from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from shopfinder.schemas.catalogue import Shop
from shopfinder.services.normalize import name_contains, normalize_name

logger = logging.getLogger(__name__)


class ResolutionState(str, enum.Enum):
    IDLE = "idle"
    NO_MATCH = "no_match"
    AUTO_RESOLVED = "auto_resolved"
    AMBIGUOUS = "ambiguous"
    SELECTED = "selected"


@dataclass(frozen=True)
class ItemResolution:
    state: ResolutionState
    search: str = ""
    matching_names: tuple[str, ...] = ()
    active_item: Optional[str] = None

    @property
    def needs_disambiguation(self) -> bool:
        return self.state is ResolutionState.AMBIGUOUS


def matching_item_names(catalogue: Sequence[Shop], search: str) -> list[str]:
    """Distinct item names containing ``search``, in catalogue order.

    Names that differ only by case or surrounding whitespace count once; the
    first spelling seen wins.
    """
    seen: set[str] = set()
    names: list[str] = []
    for shop in catalogue:
        for item in shop.items:
            if not name_contains(item.name, search):
                continue
            key = normalize_name(item.name)
            if key in seen:
                continue
            seen.add(key)
            names.append(item.name)
    return names


def resolve_item(
    catalogue: Sequence[Shop],
    search: str,
    selected: Optional[str] = None,
) -> ItemResolution:
    """Turn free search text (plus an optional earlier pick) into an active item."""
    term = (search or "").strip()
    if not term:
        return ItemResolution(state=ResolutionState.IDLE)

    names = tuple(matching_item_names(catalogue, term))

    if selected and selected.strip():
        resolution = ItemResolution(
            state=ResolutionState.SELECTED,
            search=term,
            matching_names=names,
            active_item=selected,
        )
    elif len(names) == 1:
        resolution = ItemResolution(
            state=ResolutionState.AUTO_RESOLVED,
            search=term,
            matching_names=names,
            active_item=names[0],
        )
    elif names:
        resolution = ItemResolution(state=ResolutionState.AMBIGUOUS, search=term, matching_names=names)
    else:
        resolution = ItemResolution(state=ResolutionState.NO_MATCH, search=term)

    logger.debug("Resolved %r to %s (%d matching names)", term, resolution.state.value, len(names))
    return resolution


@dataclass
class SearchSession:
    """Caller-owned search state: the raw search text and any explicit pick.

    Changing the search text always discards the pick, so a stale selection
    can never outlive the query it disambiguated.
    """

    search: str = ""
    selected: Optional[str] = field(default=None)

    def set_search(self, text: str) -> None:
        if text != self.search:
            self.selected = None
        self.search = text

    def select(self, name: str) -> bool:
        if not self.search.strip():
            return False
        self.selected = name
        return True

    def clear_selection(self) -> None:
        self.selected = None

    def resolve(self, catalogue: Sequence[Shop]) -> ItemResolution:
        return resolve_item(catalogue, self.search, self.selected)


__all__ = [
    "ItemResolution",
    "ResolutionState",
    "SearchSession",
    "matching_item_names",
    "resolve_item",
]
