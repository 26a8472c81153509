"""Keyboard input mapping."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Hashable, Mapping, Optional


class Action(str, Enum):
    """Player actions the controller understands."""

    SHIFT_DOWN = "shift_down"
    SHIFT_LEFT = "shift_left"
    SHIFT_RIGHT = "shift_right"
    ROTATE = "rotate"


# Browser style key names, as delivered by DOM ``keydown`` events.
ARROW_KEYS: Dict[str, Action] = {
    "ArrowDown": Action.SHIFT_DOWN,
    "ArrowLeft": Action.SHIFT_LEFT,
    "ArrowRight": Action.SHIFT_RIGHT,
    "ArrowUp": Action.ROTATE,
}

ActionHandler = Callable[[Action], object]


class KeyboardInput:
    """Translate key presses into :class:`Action` values.

    Keys are only forwarded while listening.  ``start_listening`` and
    ``stop_listening`` may be called repeatedly.
    """

    def __init__(
        self,
        keymap: Optional[Mapping[Hashable, Action]] = None,
        handler: Optional[ActionHandler] = None,
    ) -> None:
        self.keymap: Dict[Hashable, Action] = dict(keymap if keymap is not None else ARROW_KEYS)
        self.handler = handler
        self._listening = False

    @property
    def listening(self) -> bool:
        return self._listening

    def start_listening(self) -> None:
        self._listening = True

    def stop_listening(self) -> None:
        self._listening = False

    def on_key(self, key: Hashable) -> Optional[Action]:
        """Dispatch ``key`` and return the action it triggered, if any."""

        if not self._listening or self.handler is None:
            return None
        action = self.keymap.get(key)
        if action is None:
            return None
        self.handler(action)
        return action
