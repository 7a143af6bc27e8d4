"""
Atomic JSON file helpers.

Writes go to a temporary file in the target directory, are fsynced, then
renamed over the target with os.replace, so a reader never observes a
half-written document. Transient OS errors are retried.

Dependencies: tenacity
System role: Durable file writes for the storage adapters
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)

WRITE_ATTEMPTS = 3


@retry(
    retry=retry_if_exception_type(OSError),
    stop=stop_after_attempt(WRITE_ATTEMPTS),
    wait=wait_exponential_jitter(initial=0.05, max=1, jitter=0.05),
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__}:write_json_atomic - Retry {retry_state.attempt_number}/{WRITE_ATTEMPTS} "
        f"after {type(retry_state.outcome.exception()).__name__}"
    ),
    reraise=True,
)
def write_json_atomic(path: Path, data: Any) -> None:
    """
    Atomically replace `path` with the JSON encoding of `data`.

    Args:
        path: Destination file; parent directories are created
        data: JSON-serializable document

    Raises:
        OSError: If the write still fails after retries
        TypeError: If data is not JSON-serializable
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def read_json(path: Path) -> Any:
    """
    Read a JSON document.

    Args:
        path: File to read

    Returns:
        Any: Decoded document

    Raises:
        FileNotFoundError: If the file does not exist
        UnicodeDecodeError: If the file is not UTF-8
        json.JSONDecodeError: If the content is not valid JSON
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)
