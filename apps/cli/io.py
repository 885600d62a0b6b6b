"""CLI I/O helpers: atomic output files and portrait data URLs."""

from __future__ import annotations

import base64
import json
import mimetypes
import os
import tempfile
from pathlib import Path
from typing import Any

_FALLBACK_MIME = "application/octet-stream"


def write_text_atomic(path: Path, text: str) -> None:
    """Write ``text`` next to ``path`` and swap it in, creating parent dirs."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, raw_tmp = tempfile.mkstemp(dir=path.parent, prefix=f"{path.name}.", suffix=".tmp")
    tmp = Path(raw_tmp)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


def write_json_atomic(path: Path, payload: Any) -> None:
    write_text_atomic(path, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")


def to_data_url(content: bytes, mime_type: str | None) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type or _FALLBACK_MIME};base64,{encoded}"


def read_portrait_data_url(path: Path) -> str:
    """Read an image file as a ``data:<mime>;base64,...`` URL."""

    mime_type, _ = mimetypes.guess_type(path.name)
    return to_data_url(path.read_bytes(), mime_type)
