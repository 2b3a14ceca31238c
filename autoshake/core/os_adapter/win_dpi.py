"""Windows DPI awareness setup.

MUST be called BEFORE QApplication is created. Without per-monitor
awareness, Windows scales coordinates on high-DPI displays and the
configured capture rectangle no longer matches the captured pixels.
"""

import ctypes
from typing import Final

# Windows API constants
DPI_AWARENESS_CONTEXT_PER_MONITOR_AWARE_V2: Final[int] = -4
PROCESS_PER_MONITOR_DPI_AWARE: Final[int] = 2
ERROR_ACCESS_DENIED: Final[int] = 5

_DPI_WARNING: Final[str] = (
    "DPI awareness could not be set; capture coordinates may be scaled. "
    "Run at 100% display scaling or restart the application."
)


def setup_dpi_awareness() -> tuple[bool, str]:
    """Set per-monitor DPI awareness for the current process.

    Returns:
        (True, "") if set or already set by a manifest,
        (False, warning_message) otherwise
    """
    try:
        user32 = ctypes.windll.user32

        # DPI_AWARENESS_CONTEXT is a HANDLE (pointer-sized)
        user32.SetProcessDpiAwarenessContext.argtypes = [ctypes.c_void_p]
        user32.SetProcessDpiAwarenessContext.restype = ctypes.c_bool

        if user32.SetProcessDpiAwarenessContext(
            ctypes.c_void_p(DPI_AWARENESS_CONTEXT_PER_MONITOR_AWARE_V2)
        ):
            return True, ""

        # ACCESS_DENIED means awareness was already set for this process
        if ctypes.windll.kernel32.GetLastError() == ERROR_ACCESS_DENIED:
            return True, ""

        return False, _DPI_WARNING

    except AttributeError:
        # Windows older than 10 1703: fall back to the shcore API
        try:
            ctypes.windll.shcore.SetProcessDpiAwareness(PROCESS_PER_MONITOR_DPI_AWARE)
            return True, ""
        except Exception:
            return False, _DPI_WARNING

    except Exception as e:
        return False, f"DPI setup error: {e}"
