"""AutoShake application entry point.

Initializes DPI awareness (Windows) and checks permissions (macOS)
before Qt starts, loads the config file, then runs the overlays, the
hotkey listener and the capture thread until the exit hotkey.

IMPORTANT: DPI awareness must be set BEFORE QApplication is created.
"""

import argparse
import sys
from typing import Optional

from autoshake import __version__
from autoshake.core.config import load_config
from autoshake.core.constants import CONFIG_FILENAME
from autoshake.core.logging import LogLevel, console_listener, get_logger
from autoshake.core.os_adapter import IS_WINDOWS, check_platform_ready


def setup_platform() -> tuple[bool, str]:
    """Perform platform-specific setup before Qt initialization.

    Returns:
        (success, warning_message)
    """
    if IS_WINDOWS:
        from autoshake.core.os_adapter.win_dpi import setup_dpi_awareness
        return setup_dpi_awareness()
    return True, ""


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="autoshake",
        description="Press Enter whenever a bright marker appears in a screen region",
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILENAME,
        help=f"config file path (default: {CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="print debug log entries",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Application entry point.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = parse_args(argv)

    logger = get_logger()
    logger.buffer.add_listener(
        console_listener(LogLevel.DEBUG if args.verbose else LogLevel.INFO)
    )

    # Platform setup MUST happen before QApplication
    dpi_ok, dpi_warning = setup_platform()
    if not dpi_ok:
        logger.warning(dpi_warning)

    ready, message = check_platform_ready()
    if not ready:
        logger.error(message)
        return 1

    config = load_config(args.config, logger)

    # Now we can import Qt
    from PySide6.QtWidgets import QApplication

    from autoshake.controller import ApplicationController

    app = QApplication(sys.argv[:1])
    app.setApplicationName("AutoShake")
    app.setApplicationVersion(__version__)
    # Only overlays are shown; closing them must not end the app
    app.setQuitOnLastWindowClosed(False)

    controller = ApplicationController(config, args.config, logger)
    if not controller.start():
        return 1

    hk = config.hotkeys
    logger.info(
        f"Ready: {hk.toggle_action} toggles auto action, "
        f"{hk.toggle_box} edits the capture region, {hk.exit_app} exits"
    )

    try:
        return app.exec()
    finally:
        controller.shutdown()


if __name__ == "__main__":
    sys.exit(main())
