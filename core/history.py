import logging
from typing import Iterable, Tuple

from core.types import ColorParameter

log = logging.getLogger()

Snapshot = Tuple[ColorParameter, ...]


class History:
    """
    Linear undo/redo log of full parameter lists.

    Snapshots are stored as tuples and never modified once pushed, committing after
    an undo throws away everything that could have been redone.
    """

    def __init__(self):
        self.snapshots: list[Snapshot] = [()]
        self.index = 0

    @property
    def current(self) -> Snapshot:
        return self.snapshots[self.index]

    @property
    def can_undo(self) -> bool:
        return self.index > 0

    @property
    def can_redo(self) -> bool:
        return self.index < len(self.snapshots) - 1

    def replace(self, params: Iterable[ColorParameter]):
        # a fresh load starts a new history
        self.snapshots = [tuple(params)]
        self.index = 0

    def commit(self, params: Iterable[ColorParameter]):
        discarded = len(self.snapshots) - self.index - 1
        self.snapshots = self.snapshots[:self.index + 1] + [tuple(params)]
        self.index = len(self.snapshots) - 1
        if discarded:
            log.debug(f"Discarded {discarded} redo snapshot(s)")

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self.index -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self.index += 1
        return True

    def reset(self):
        self.snapshots = [()]
        self.index = 0

    def __len__(self):
        return len(self.snapshots)
