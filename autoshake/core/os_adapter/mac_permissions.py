"""macOS privacy permissions needed to watch the screen and press keys."""

from dataclasses import dataclass
from typing import Optional

_SETTINGS_PATH = "System Settings > Privacy & Security"


@dataclass(frozen=True)
class PermissionStatus:
    """Which privacy permissions the process currently holds.

    Attributes:
        screen_recording: mss can read other windows' pixels
        accessibility: pynput can post key events
    """

    screen_recording: bool
    accessibility: bool

    @property
    def all_granted(self) -> bool:
        return self.screen_recording and self.accessibility

    @property
    def missing_permissions(self) -> list[str]:
        names = (
            ("Screen Recording", self.screen_recording),
            ("Accessibility", self.accessibility),
        )
        return [name for name, granted in names if not granted]

    @property
    def guidance(self) -> Optional[str]:
        """Instructions for the user, or None when nothing is missing."""
        missing = self.missing_permissions
        if not missing:
            return None
        listed = " and ".join(missing)
        return (
            f"AutoShake needs {listed} permission.\n"
            f"Grant it in {_SETTINGS_PATH} > {' / '.join(missing)}, "
            "then restart AutoShake."
        )


def check_permissions() -> PermissionStatus:
    """Query the current permission state without prompting the user.

    pyobjc is a macOS-only dependency; if it is not installed the check
    reports everything as granted and failures surface later as logged
    capture or key errors.
    """
    try:
        from ApplicationServices import AXIsProcessTrustedWithOptions
        from Quartz import CGPreflightScreenCaptureAccess
    except ImportError:
        return PermissionStatus(screen_recording=True, accessibility=True)

    return PermissionStatus(
        screen_recording=bool(CGPreflightScreenCaptureAccess()),
        accessibility=bool(AXIsProcessTrustedWithOptions(None)),
    )
