"""Marketing Mavericks chat assistant backend and client.

Importing the package attaches a single stream handler to the ``mavericks``
logger. ``MAVERICKS_LOG_LEVEL`` sets the package level and
``MAVERICKS_LLM_LOG_LEVEL`` overrides it for upstream model calls only.
"""

import logging
import os

LOG_FORMAT = "[MAVERICKS][%(levelname)s] %(name)s: %(message)s"


def _level_from_env(var: str, default: int) -> int:
    name = (os.getenv(var) or "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def _configure_logging() -> None:
    root = logging.getLogger("mavericks")
    if not any(getattr(h, "_mavericks", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._mavericks = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    package_level = _level_from_env("MAVERICKS_LOG_LEVEL", logging.INFO)
    root.setLevel(package_level)
    logging.getLogger("mavericks.llm").setLevel(_level_from_env("MAVERICKS_LLM_LOG_LEVEL", package_level))


_configure_logging()
