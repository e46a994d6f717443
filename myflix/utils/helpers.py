# myflix/utils/helpers.py

import base64
import binascii
import logging
import re
import time
from typing import Optional

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "original-images/"
THUMBNAIL_PREFIX = "thumbnails/"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")

# --- Upload Naming ---

def sanitize_filename(filename: Optional[str]) -> str:
    """
    Reduces a client-supplied file name to a safe storage key component.

    Only the last path component is kept (``/`` and ``\\`` both count as
    separators), every character outside ``[A-Za-z0-9._-]`` becomes ``_`` and
    leading dots are dropped, so ``../../etc/passwd`` becomes ``passwd``.

    Args:
        filename: The name as sent by the client.

    Returns:
        The sanitized name, or an empty string if nothing usable remains.
    """
    if not filename:
        return ""
    base = re.split(r"[\\/]", filename.strip())[-1]
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", base).lstrip(".")
    if cleaned != base:
        logger.debug(f"Sanitized upload filename {filename!r} -> {cleaned!r}")
    return cleaned


def current_millis() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


def build_upload_key(safe_filename: str, timestamp_ms: Optional[int] = None) -> str:
    """Key for an uploaded original: ``original-images/<millis>_<name>``."""
    if timestamp_ms is None:
        timestamp_ms = current_millis()
    return f"{UPLOAD_PREFIX}{timestamp_ms}_{safe_filename}"

# --- Payload Decoding ---

def decode_base64_payload(data: str) -> Optional[bytes]:
    """
    Decodes a base64 string, tolerating a ``data:<type>;base64,`` prefix.

    Returns:
        The decoded bytes, or None if ``data`` is not valid base64.
    """
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    data = "".join(data.split())
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None
