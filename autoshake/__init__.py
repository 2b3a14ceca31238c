"""AutoShake: press a key whenever a bright marker appears on screen."""

__version__ = "0.1.0"
