"""Keystroke synthesis with pynput.

The capture loop fires one press-and-release of a fixed key per positive
detection. Synthesis is best effort: a failure is logged and the loop
keeps running.
"""

from typing import Callable, Optional, Union

from pynput.keyboard import Controller as KeyboardController
from pynput.keyboard import Key, KeyCode

from ..logging import Logger, get_logger

# Global controller instance (reused for efficiency)
_keyboard: Optional[KeyboardController] = None

KeyLike = Union[Key, KeyCode, str]


def _get_keyboard() -> KeyboardController:
    """Get or create the keyboard controller singleton."""
    global _keyboard
    if _keyboard is None:
        _keyboard = KeyboardController()
    return _keyboard


def send_key(key: KeyLike) -> None:
    """Send a single key press and release.

    Args:
        key: pynput Key, KeyCode or a single character
    """
    keyboard = _get_keyboard()
    keyboard.press(key)
    keyboard.release(key)


class KeyDispatcher:
    """Fires the action keystroke for a positive detection.

    Args:
        key: Key to press (Enter by default)
        sender: Function that synthesizes the key event (for testing)
        logger: Logger instance (uses global if None)
    """

    def __init__(
        self,
        key: KeyLike = Key.enter,
        sender: Callable[[KeyLike], None] = send_key,
        logger: Optional[Logger] = None,
    ) -> None:
        self._key = key
        self._sender = sender
        self._logger = logger or get_logger()
        self._fired = 0

    @property
    def key(self) -> KeyLike:
        return self._key

    @property
    def fired_count(self) -> int:
        """Number of keystrokes synthesized successfully."""
        return self._fired

    def fire(self) -> bool:
        """Press and release the action key.

        Returns:
            True if the event was synthesized, False if the OS refused it
        """
        try:
            self._sender(self._key)
        except Exception as e:
            self._logger.warning(f"Key synthesis failed: {e}")
            return False

        self._fired += 1
        return True
