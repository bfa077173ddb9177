# notify/modal.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DELETE_MODAL = "delete-modal"
DELETE_MODAL_TEXT = "Are you sure you want to remove this task?"


@dataclass(frozen=True, slots=True)
class ModalData:
    kind: str
    text: str
    on_confirm: Callable[[], None]


class ModalHost:
    """Single confirmation dialog slot. Showing a new modal replaces the open one."""

    def __init__(self) -> None:
        self._modal: ModalData | None = None

    @property
    def modal(self) -> ModalData | None:
        return self._modal

    def show(self, modal: ModalData) -> None:
        if self._modal is not None:
            logger.debug("Replacing open modal %s", self._modal.kind)
        self._modal = modal

    def hide(self) -> None:
        self._modal = None

    def confirm(self) -> bool:
        """Run the open modal's action and close it. False when nothing is open."""
        modal = self._modal
        if modal is None:
            return False
        try:
            modal.on_confirm()
        finally:
            self.hide()
        return True

    def cancel(self) -> bool:
        if self._modal is None:
            return False
        self.hide()
        return True
