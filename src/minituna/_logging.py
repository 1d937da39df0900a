import logging
from typing import Optional

_ROOT_NAME = "minituna"
_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _configure_root_logger() -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(h)
        root.setLevel(logging.INFO)
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Returns a logger under the package root, installing the default handler once."""
    _configure_root_logger()
    if name is None or name == _ROOT_NAME:
        return logging.getLogger(_ROOT_NAME)
    if not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)


def set_verbosity(level) -> None:
    """Sets the level of the package root logger. Accepts an int or a level name."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    _configure_root_logger().setLevel(level)


def get_verbosity() -> int:
    return _configure_root_logger().getEffectiveLevel()
