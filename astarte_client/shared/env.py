"""Resolve AppEngine credentials stored in Docker-style secret files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable

from astarte_client.shared.logging import get_logger

logger = get_logger(__name__)

SECRET_KEYS = ("ASTARTE_TOKEN",)


def load_secret_file_variables(keys: Iterable[str] = SECRET_KEYS) -> Dict[str, str]:
    """
    Expose the contents of ``<KEY>_FILE`` as ``<KEY>`` for every key given.

    A variable that is already set wins over its file. Unreadable files are
    logged and skipped, leaving the variable unset.

    Returns:
        The variables that were loaded, mapped to the file they came from.
    """
    loaded: Dict[str, str] = {}
    for key in keys:
        file_path = os.environ.get(f"{key}_FILE")
        if not file_path or os.environ.get(key):
            continue
        try:
            os.environ[key] = Path(file_path).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "env.secret_file.load_failed",
                key=key,
                path=file_path,
                error=str(exc),
            )
            continue
        loaded[key] = file_path
    return loaded
