# src/jspack/remote/download.py
"""Download HTTP de um único arquivo (requests, em streaming)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import requests

CHUNK_SIZE = 64 * 1024


def download(url: str, target_dir: str, name: str, timeout: Optional[float] = 60) -> Dict[str, Any]:
    target = Path(target_dir) / name
    target.parent.mkdir(parents=True, exist_ok=True)

    with requests.get(url, stream=True, timeout=timeout) as resp:
        resp.raise_for_status()
        size = 0
        with target.open("wb") as f:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
                    size += len(chunk)

    return {"path": str(target), "bytes": size, "status_code": resp.status_code}
