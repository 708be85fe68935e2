from typing import Optional, Sequence


def toggle(selection: set[str], param_id: str) -> set[str]:
    selection = set(selection)
    if param_id in selection:
        selection.discard(param_id)
    else:
        selection.add(param_id)
    return selection


def select_range(selection: set[str], visible_ids: Sequence[str], anchor: Optional[int],
                 index: int, deselect: bool = False) -> set[str]:
    """
    Shift-click (select) or alt-click (deselect) every visible row between the anchor and index.

    Without an anchor this is a plain toggle of the clicked row.
    """
    if anchor is None or not 0 <= anchor < len(visible_ids):
        return toggle(selection, visible_ids[index])

    selection = set(selection)
    start, end = sorted((anchor, index))
    for param_id in visible_ids[start:end + 1]:
        if deselect:
            selection.discard(param_id)
        else:
            selection.add(param_id)
    return selection


def toggle_all(selection: set[str], visible_ids: Sequence[str]) -> set[str]:
    # header checkbox: clear when everything visible is already selected
    if visible_ids and set(visible_ids) <= selection:
        return set()
    return set(visible_ids)
