"""Case image uploads: store an optional multipart file on disk and return its public path."""

import logging
import time
from pathlib import Path

from fastapi import UploadFile

from casedesk.core.errors import InvalidInputError

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads/"


def is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


def stored_filename(original: str, now_ms: int | None = None) -> str:
    """Millisecond timestamp plus the original extension, e.g. 1718000000000.png."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{now_ms}{Path(original).suffix.lower()}"


async def save_upload(
    upload: object | None,
    upload_dir: str | Path,
    *,
    max_bytes: int,
) -> str:
    """
    Persist an uploaded image and return "/uploads/<name>", or "" when there is none.

    Raises InvalidInputError if the file exceeds max_bytes.
    """
    if upload is None or not is_upload_file(upload):
        return ""
    filename = getattr(upload, "filename", None) or ""
    if not filename:
        return ""
    content = await upload.read()
    if not content:
        return ""
    if len(content) > max_bytes:
        raise InvalidInputError(
            f"File size must not exceed {max_bytes // 1024} KB."
        )
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    name = stored_filename(filename)
    target = directory / name
    # Two uploads in the same millisecond would collide; bump until free.
    bump = 0
    while target.exists():
        bump += 1
        name = stored_filename(filename, time.time_ns() // 1_000_000 + bump)
        target = directory / name
    target.write_bytes(content)
    logger.info("Stored upload %s (%s bytes)", name, len(content))
    return PUBLIC_PREFIX + name


def discard_upload(public_path: str, upload_dir: str | Path) -> None:
    """Remove a file stored by save_upload, e.g. when the case insert failed. "" is a no-op."""
    if not public_path.startswith(PUBLIC_PREFIX):
        return
    target = Path(upload_dir) / public_path.removeprefix(PUBLIC_PREFIX)
    try:
        target.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove orphaned upload %s", target, exc_info=True)
        return
    logger.info("Removed orphaned upload %s", target.name)
