# src/jspack/core/fileset/query.py
"""
Consultas determinísticas sobre Snapshots.

Todas as funções retornam sequências em ordem lexicográfica de path, para
que consumidores como "concatenar todos os arquivos encontrados" sejam
reprodutíveis entre execuções.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Pattern, Union

from .model import Role, Snapshot, TrackedFile

PatternLike = Union[str, Pattern[str]]


def _compile(patterns: Iterable[PatternLike]) -> List[Pattern[str]]:
    return [p if isinstance(p, re.Pattern) else re.compile(p) for p in patterns]


def files_by_extension(files: Union[Snapshot, Iterable[TrackedFile]], exts: Iterable[str]) -> List[TrackedFile]:
    suffixes = tuple(exts)
    return sorted((f for f in files if f.path.endswith(suffixes)), key=lambda f: f.path)


def files_not_by_extension(files: Union[Snapshot, Iterable[TrackedFile]], exts: Iterable[str]) -> List[TrackedFile]:
    suffixes = tuple(exts)
    return sorted((f for f in files if not f.path.endswith(suffixes)), key=lambda f: f.path)


def files_by_pattern(files: Union[Snapshot, Iterable[TrackedFile]], patterns: Iterable[PatternLike]) -> List[TrackedFile]:
    """Arquivos cujo path casa (re.search) com qualquer um dos padrões."""
    compiled = _compile(patterns)
    return sorted(
        (f for f in files if any(p.search(f.path) for p in compiled)),
        key=lambda f: f.path,
    )


def output_files(snapshot: Snapshot) -> List[TrackedFile]:
    return [f for f in snapshot.files if f.role is Role.RESOURCE]


def source_files(snapshot: Snapshot) -> List[TrackedFile]:
    return [f for f in snapshot.files if f.role is Role.SOURCE]
