# src/jspack/stages/common.py
"""Helpers compartilhados pelos Stages concretos."""

from __future__ import annotations

import re
from typing import Iterable, List

from jspack.core import errors
from jspack.core.exceptions import NotFoundError
from jspack.core.fileset import Snapshot, TrackedFile, files_by_pattern, normalize_path


def first_match(snapshot: Snapshot, pattern: str, *, stage: str) -> TrackedFile:
    """Primeiro arquivo (ordem de path) cujo path casa com `pattern`."""
    found = files_by_pattern(snapshot, [pattern])
    if not found:
        raise NotFoundError.from_payload(
            errors.not_found(
                resource=pattern,
                stage=stage,
                hint="Verifique se um Stage anterior adicionou o arquivo ao fileset.",
            )
        )
    return found[0]


def replaced_paths(snapshot: Snapshot, paths: Iterable[str]) -> List[str]:
    """Paths de destino que já existem no Snapshot e serão sobrescritos."""
    normalized = {normalize_path(p) for p in paths}
    return sorted(p for p in normalized if p in snapshot)


def url_file_name(url: str) -> str:
    return re.split(r"[?#]", url, maxsplit=1)[0].rstrip().split("/")[-1]
