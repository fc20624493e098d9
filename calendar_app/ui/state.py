"""Finite state machine for the calendar view.

    Idle --fetch_start--> Loading --fetch_complete--> Idle
    Loading --fetch_start--> Loading           (a newer fetch supersedes)
    Idle --open_dialog(mode)--> DialogOpen(mode) --close_dialog--> Idle
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    DIALOG_OPEN = "dialog_open"


class DialogMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class InvalidTransition(RuntimeError):
    def __init__(self, phase: Phase, action: str) -> None:
        self.phase = phase
        self.action = action
        super().__init__(f"Cannot {action} while {phase.value}")


@dataclass(frozen=True)
class ViewState:
    phase: Phase = Phase.IDLE
    dialog_mode: Optional[DialogMode] = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.LOADING

    @property
    def dialog_open(self) -> bool:
        return self.phase is Phase.DIALOG_OPEN


class ViewStateMachine:
    def __init__(self) -> None:
        self.state = ViewState()

    def _move(self, action: str, allowed: tuple[Phase, ...], target: ViewState) -> ViewState:
        if self.state.phase not in allowed:
            raise InvalidTransition(self.state.phase, action)
        logger.debug("%s: %s -> %s", action, self.state.phase.value, target.phase.value)
        self.state = target
        return target

    def fetch_start(self) -> ViewState:
        return self._move("start fetch", (Phase.IDLE, Phase.LOADING), ViewState(Phase.LOADING))

    def fetch_complete(self) -> ViewState:
        return self._move("complete fetch", (Phase.LOADING,), ViewState(Phase.IDLE))

    def open_dialog(self, mode: DialogMode) -> ViewState:
        return self._move("open dialog", (Phase.IDLE,), ViewState(Phase.DIALOG_OPEN, mode))

    def close_dialog(self) -> ViewState:
        return self._move("close dialog", (Phase.DIALOG_OPEN,), ViewState(Phase.IDLE))


__all__ = ["DialogMode", "InvalidTransition", "Phase", "ViewState", "ViewStateMachine"]
