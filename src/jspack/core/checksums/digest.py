# src/jspack/core/checksums/digest.py
"""Digest de conteúdo (MD5, hex maiúsculo) lido em blocos."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Dict, Iterable, Union

from jspack.core.fileset import TrackedFile

CHUNK_SIZE = 64 * 1024


def md5_hex(path: Union[str, Path], chunk_size: int = CHUNK_SIZE) -> str:
    h = hashlib.md5()
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest().upper()


def digest_files(files: Iterable[TrackedFile]) -> Dict[str, str]:
    """Retorna `{path: digest}` ordenado por path."""
    digests = {f.path: md5_hex(f.source) for f in files}
    return {path: digests[path] for path in sorted(digests)}
