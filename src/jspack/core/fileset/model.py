# src/jspack/core/fileset/model.py
"""
Tipos canônicos do fileset do jspack.

Este módulo define as estruturas imutáveis que os Stages leem e produzem:

    - Role        → papel de um arquivo (resource | source)
    - TrackedFile → path relativo + conteúdo em disco + papel
    - Snapshot    → coleção imutável e versionada de TrackedFiles

Princípios fundamentais:
    - Snapshots nunca são mutados in-place
    - Revisões anteriores permanecem válidas e inspecionáveis
    - A ordem de iteração é sempre lexicográfica por path

Invariantes:
    - Paths são únicos dentro de uma revisão
    - Paths são relativos, separados por "/" e sem segmentos ".."
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from jspack.core import errors
from jspack.core.exceptions import ConflictError


class Role(str, Enum):
    """
    Papel de um arquivo no fileset.

        - RESOURCE: saída distribuível (entra no artefato final)
        - SOURCE: insumo que ainda precisa de processamento (não é distribuído)
    """

    RESOURCE = "resource"
    SOURCE = "source"


def normalize_path(path: str) -> str:
    """Normaliza um path de fileset (relativo, separado por '/')."""
    if not isinstance(path, str) or not path.strip():
        raise ValueError("fileset path must be a non-empty string")

    parts = [p for p in PurePosixPath(path.replace("\\", "/")).parts if p not in ("/", ".")]
    if not parts or ".." in parts:
        raise ValueError(f"Invalid fileset path: {path!r}")
    return "/".join(parts)


@dataclass(frozen=True)
class TrackedFile:
    """Arquivo rastreado: path no fileset, conteúdo em disco e papel."""

    path: str
    source: Path
    role: Role = Role.RESOURCE

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", normalize_path(self.path))
        object.__setattr__(self, "source", Path(self.source))
        object.__setattr__(self, "role", Role(self.role))

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    def read_bytes(self) -> bytes:
        return self.source.read_bytes()

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.source.read_text(encoding=encoding)


@dataclass(frozen=True)
class Snapshot:
    """
    Coleção imutável e versionada de TrackedFiles.

    Um Snapshot vazio (revisão 0) inicia toda run; cada commit produz um
    novo Snapshot com revisão maior. Duas entradas com o mesmo path são
    rejeitadas com `ConflictError`.
    """

    files: Tuple[TrackedFile, ...] = ()
    revision: int = 0
    _index: Mapping[str, TrackedFile] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        index = {}
        duplicates = []
        for f in self.files:
            if f.path in index:
                duplicates.append(f.path)
            index[f.path] = f
        if duplicates:
            raise ConflictError.from_payload(errors.conflict(paths=sorted(set(duplicates))))

        object.__setattr__(self, "files", tuple(index[p] for p in sorted(index)))
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    @classmethod
    def of(cls, files: Iterable[TrackedFile], *, revision: int = 0) -> "Snapshot":
        return cls(files=tuple(files), revision=revision)

    def paths(self) -> Tuple[str, ...]:
        return tuple(f.path for f in self.files)

    def get(self, path: str) -> Optional[TrackedFile]:
        return self._index.get(normalize_path(path))

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path in self._index

    def __iter__(self) -> Iterator[TrackedFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)
