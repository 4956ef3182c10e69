"""Local storage for payment-proof images."""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from shopcore.domain.exceptions import InvalidInputError

FILE_TYPE_MAP = {
    ".png": "png",
    ".jpeg": "jpeg",
    ".jpg": "jpg",
}


class ProofStorage:

    def __init__(self, uploads_dir: Path, base_url: str) -> None:
        self._uploads_dir = uploads_dir
        self._base_url = base_url.rstrip("/")

    def store(self, source: Path) -> str:
        """Copy ``source`` into the uploads directory and return its URL."""
        extension = FILE_TYPE_MAP.get(source.suffix.lower())
        if extension is None:
            raise InvalidInputError("Invalid image type")
        if not source.is_file():
            raise InvalidInputError(f"Payment proof file not found: {source}")

        self._uploads_dir.mkdir(parents=True, exist_ok=True)
        file_name = f"payment-proof-{int(time.time() * 1000)}.{extension}"
        shutil.copyfile(source, self._uploads_dir / file_name)
        return f"{self._base_url}/{file_name}"
