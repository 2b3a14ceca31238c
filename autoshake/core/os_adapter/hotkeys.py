"""Global hotkeys with pynput.

Config files name hotkeys the way users type them ("F3", "ctrl+shift+a");
pynput's GlobalHotKeys wants "<f3>" and "<ctrl>+<shift>+a".
"""

from typing import Callable, Optional

from pynput import keyboard

from ..logging import Logger, get_logger

_ALIASES = {
    "control": "ctrl",
    "option": "alt",
    "win": "cmd",
    "super": "cmd",
    "meta": "cmd",
    "return": "enter",
    "escape": "esc",
    "del": "delete",
    "pgup": "page_up",
    "pgdn": "page_down",
}


def to_pynput_hotkey(name: str) -> str:
    """Convert a config hotkey name to pynput GlobalHotKeys syntax.

    Args:
        name: e.g. "F3", "Alt+F4", "ctrl+shift+a"

    Returns:
        e.g. "<f3>", "<alt>+<f4>", "<ctrl>+<shift>+a"

    Raises:
        ValueError: If the name or one of its parts is empty
    """
    parts = [p.strip().lower() for p in name.split("+")]
    if not name.strip() or any(not p for p in parts):
        raise ValueError(f"Invalid hotkey: {name!r}")

    converted = []
    for part in parts:
        if len(part) == 1:
            converted.append(part)
        else:
            converted.append(f"<{_ALIASES.get(part, part)}>")
    return "+".join(converted)


class HotkeyListener:
    """Runs a set of global hotkeys on pynput's listener thread.

    Callbacks are invoked on that thread; anything touching Qt must be
    marshalled to the main thread by the caller.

    Args:
        bindings: Action name -> (config hotkey name, callback)
        logger: Logger instance (uses global if None)
    """

    def __init__(
        self,
        bindings: dict[str, tuple[str, Callable[[], None]]],
        logger: Optional[Logger] = None,
    ) -> None:
        self._bindings = bindings
        self._logger = logger or get_logger()
        self._listener: Optional[keyboard.GlobalHotKeys] = None

    @property
    def is_running(self) -> bool:
        return self._listener is not None and self._listener.is_alive()

    def start(self) -> bool:
        """Register the hotkeys and start listening.

        Returns:
            True if started, False if a binding is invalid or two actions
            share a hotkey
        """
        self.stop()

        try:
            hotkeys = self._resolve()
            self._listener = keyboard.GlobalHotKeys(hotkeys)
        except ValueError as e:
            self._logger.error(f"Invalid hotkey binding: {e}")
            return False

        self._listener.start()
        self._logger.info(
            "Hotkeys active: " + ", ".join(
                f"{name} = {action}" for action, (name, _) in self._bindings.items()
            )
        )
        return True

    def _resolve(self) -> dict[str, Callable[[], None]]:
        """Map pynput hotkey strings to callbacks.

        Raises:
            ValueError: If a name is malformed or two actions resolve to
                the same hotkey
        """
        hotkeys: dict[str, Callable[[], None]] = {}
        owners: dict[str, str] = {}
        for action, (name, callback) in self._bindings.items():
            key = to_pynput_hotkey(name)
            if key in owners:
                raise ValueError(
                    f"{name!r} is bound to both {owners[key]} and {action}"
                )
            owners[key] = action
            hotkeys[key] = callback
        return hotkeys

    def stop(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
