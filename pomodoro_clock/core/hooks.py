from __future__ import annotations

import logging
from typing import Callable


logger = logging.getLogger(__name__)

Hook = Callable[[], None]

HOOK_NAMES = ("started", "work_finished", "break_finished", "killed")


class TimerHooks:
    """Named, ordered callback lists run after timer transitions."""

    def __init__(self) -> None:
        self._hooks: dict[str, list[Hook]] = {name: [] for name in HOOK_NAMES}

    def register(self, name: str, callback: Hook) -> None:
        self._callbacks(name).append(callback)

    def unregister(self, name: str, callback: Hook) -> None:
        callbacks = self._callbacks(name)
        if callback in callbacks:
            callbacks.remove(callback)

    def callbacks(self, name: str) -> tuple[Hook, ...]:
        return tuple(self._callbacks(name))

    def run(self, name: str) -> None:
        for callback in tuple(self._callbacks(name)):
            try:
                callback()
            except Exception:
                logger.exception("Hook %s failed in %r", name, callback)

    def _callbacks(self, name: str) -> list[Hook]:
        if name not in self._hooks:
            raise KeyError(f"Unknown hook list {name!r}")
        return self._hooks[name]
