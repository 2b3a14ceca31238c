"""Load and save the persisted configuration file.

The file is JSON with three sections (capture, hotkeys, ui). A missing
or unreadable file is replaced by the defaults.
"""

import json
from pathlib import Path
from typing import Optional, Union

from .constants import CONFIG_FILENAME
from .logging import Logger, get_logger
from .model import AppConfig

PathLike = Union[str, Path]


def load_config(
    path: PathLike = CONFIG_FILENAME,
    logger: Optional[Logger] = None,
) -> AppConfig:
    """Load the configuration from path.

    If the file does not exist or cannot be parsed, the defaults are
    returned and written back to path.

    Args:
        path: Config file location
        logger: Logger instance (uses global if None)

    Returns:
        Parsed configuration, or defaults
    """
    logger = logger or get_logger()
    path = Path(path)

    try:
        with path.open("r", encoding="utf-8") as f:
            config = AppConfig.from_dict(json.load(f))
        logger.info(f"Loaded config from {path}")
        return config
    except FileNotFoundError:
        logger.info(f"No config at {path}, writing defaults")
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning(f"Invalid config {path} ({e}), reverting to defaults")

    config = AppConfig()
    save_config(config, path, logger)
    return config


def save_config(
    config: AppConfig,
    path: PathLike = CONFIG_FILENAME,
    logger: Optional[Logger] = None,
) -> bool:
    """Write the configuration as pretty-printed JSON.

    Returns:
        True if saved, False on I/O errors
    """
    logger = logger or get_logger()
    path = Path(path)

    try:
        with path.open("w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
            f.write("\n")
    except OSError as e:
        logger.error(f"Failed to save config to {path}: {e}")
        return False

    logger.debug(f"Saved config to {path}")
    return True
