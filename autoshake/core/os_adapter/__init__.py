"""Operating system glue: DPI, permissions, input and hotkeys.

Modules that need a platform library (pynput, pyobjc, ctypes.windll)
are imported by their callers, so importing this package is always safe.
"""

import sys

IS_WINDOWS: bool = sys.platform == "win32"
IS_MACOS: bool = sys.platform == "darwin"
IS_LINUX: bool = sys.platform.startswith("linux")


def check_platform_ready() -> tuple[bool, str]:
    """Check that the process may capture the screen and synthesize keys.

    Only macOS gates both behind user-granted permissions; elsewhere the
    answer is always yes.

    Returns:
        (ready, message) where message explains what to grant
    """
    if not IS_MACOS:
        return True, ""

    from .mac_permissions import check_permissions

    status = check_permissions()
    if status.all_granted:
        return True, ""
    return False, status.guidance or "Missing required system permissions"


__all__ = ["IS_WINDOWS", "IS_MACOS", "IS_LINUX", "check_platform_ready"]
