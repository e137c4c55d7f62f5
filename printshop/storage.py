from __future__ import annotations

import random
import re
import time
from pathlib import Path

from fastapi import UploadFile

from .errors import MissingUpload, UploadTooLarge

UPLOAD_URL_PREFIX = "/uploads"


def _safe_extension(filename: str) -> str:
    name = filename.strip().replace("\\", "/").split("/")[-1]
    ext = Path(name).suffix
    return re.sub(r"[^a-zA-Z0-9.]+", "", ext)[:16]


def generate_filename(original: str, field: str = "file") -> str:
    """``<field>-<epoch ms>-<random>`` plus the original extension."""
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{field}-{unique_suffix}{_safe_extension(original)}"


async def save_upload(upload: UploadFile | None, upload_dir: Path, max_upload_mb: int) -> dict:
    if upload is None or not upload.filename:
        raise MissingUpload()

    content = await upload.read()
    if len(content) > max_upload_mb * 1024 * 1024:
        raise UploadTooLarge(f"File is too large. Maximum {max_upload_mb} MB.")

    upload_dir.mkdir(parents=True, exist_ok=True)
    stored_name = generate_filename(upload.filename)
    (upload_dir / stored_name).write_bytes(content)

    return {
        "success": True,
        "fileId": stored_name,
        "fileName": upload.filename,
        "fileUrl": f"{UPLOAD_URL_PREFIX}/{stored_name}",
    }
