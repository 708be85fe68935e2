from dataclasses import dataclass, field
from typing import List, Sequence

from core.color import color_sort_key, is_grayscale
from core.constants import SortDirection
from core.extractor import folder_of
from core.types import ColorParameter


@dataclass
class DisplayState:
    # display-only filters, none of this is part of the undo history
    selected_folders: set[str] = field(default_factory=set)
    show_grayscale: bool = True
    search: str = ""
    sort: SortDirection = SortDirection.NONE


def next_sort(current: SortDirection) -> SortDirection:
    return {
        SortDirection.NONE: SortDirection.ASCENDING,
        SortDirection.ASCENDING: SortDirection.DESCENDING,
        SortDirection.DESCENDING: SortDirection.NONE,
    }[current]


def visible_parameters(params: Sequence[ColorParameter], folders: Sequence[str],
                       state: DisplayState) -> List[ColorParameter]:
    """Sorted and filtered rows for the parameter table."""
    rows = list(params)

    if state.sort is not SortDirection.NONE:
        rows.sort(key=lambda p: color_sort_key(p.rgba), reverse=state.sort is SortDirection.DESCENDING)

    if folders:
        rows = [p for p in rows if folder_of(p.relative_path) in state.selected_folders]

    if not state.show_grayscale:
        rows = [p for p in rows if not is_grayscale(p.rgba)]

    if state.search:
        term = state.search.lower()
        rows = [p for p in rows if term in p.param_name.lower() or term in p.file_name.lower()]

    return rows
