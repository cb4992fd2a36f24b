# src/jspack/resolve/archives.py
"""
Resolução de arquivos a partir das dependências declaradas.

O conjunto de dependências do host é representado por uma lista ordenada
de arquivos `.jar`/`.zip` já resolvidos (a resolução do grafo em si é
externa). Este módulo apenas:
    - lista entradas cujo nome termina com algum sufixo
    - localiza e extrai uma entrada nomeada
    - calcula um fingerprint por valor do conjunto (para memoização)

Decisões arquiteturais:
    - A primeira dependência que contém um path vence (ordem declarada)
    - O fingerprint usa o conteúdo (MD5) de cada arquivo, nunca mtime
"""

from __future__ import annotations

import glob
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Tuple, Union, runtime_checkable

from jspack.core import errors
from jspack.core.checksums.digest import md5_hex
from jspack.core.config.hashing import compute_fingerprint
from jspack.core.exceptions import NotFoundError

PathLike = Union[str, Path]


@runtime_checkable
class DependencyResolver(Protocol):
    def fingerprint(self) -> str:
        ...

    def list_matching_files(self, suffixes: Iterable[str]) -> List[str]:
        ...

    def extract(self, path: str, target: Path) -> Path:
        ...

    def archive_paths(self) -> List[str]:
        ...


def _not_found(resource: str, hint: Optional[str] = None) -> NotFoundError:
    extra = {"hint": hint} if hint else {}
    return NotFoundError.from_payload(errors.not_found(resource=resource, **extra))


@dataclass(frozen=True)
class ArchiveResolver:
    """Resolver sobre uma sequência ordenada de arquivos zip/jar."""

    archives: Tuple[Path, ...] = ()

    @classmethod
    def from_paths(cls, paths: Iterable[PathLike]) -> "ArchiveResolver":
        return cls(archives=tuple(Path(p) for p in paths))

    @classmethod
    def from_directory(cls, directory: PathLike, patterns: Iterable[str] = ("*.jar", "*.zip")) -> "ArchiveResolver":
        root = Path(directory)
        if not root.is_dir():
            raise _not_found(str(root), hint="Informe um diretório existente com as dependências resolvidas.")
        found = sorted({p for pattern in patterns for p in root.glob(pattern) if p.is_file()})
        return cls(archives=tuple(found))

    @classmethod
    def from_glob(cls, pattern: str) -> "ArchiveResolver":
        return cls(archives=tuple(Path(p) for p in sorted(glob.glob(pattern))))

    def _checked(self) -> Tuple[Path, ...]:
        for archive in self.archives:
            if not archive.is_file():
                raise _not_found(str(archive), hint="Dependência declarada não existe em disco.")
        return self.archives

    def archive_paths(self) -> List[str]:
        return [str(p) for p in self._checked()]

    def fingerprint(self) -> str:
        return compute_fingerprint([[str(p), md5_hex(p)] for p in self._checked()])

    def entries(self) -> Iterator[Tuple[Path, str]]:
        """Itera `(arquivo, nome da entrada)`; diretórios são ignorados."""
        for archive in self._checked():
            with zipfile.ZipFile(archive) as zf:
                names = sorted(info.filename for info in zf.infolist() if not info.is_dir())
            for name in names:
                yield archive, name

    def index(self) -> Dict[str, Path]:
        found: Dict[str, Path] = {}
        for archive, name in self.entries():
            found.setdefault(name, archive)
        return found

    def list_matching_files(self, suffixes: Iterable[str]) -> List[str]:
        wanted = tuple(suffixes)
        return sorted(name for name in self.index() if name.endswith(wanted))

    def locate(self, path: str) -> Optional[Path]:
        return self.index().get(path)

    def extract(self, path: str, target: Path) -> Path:
        archive = self.locate(path)
        if archive is None:
            raise _not_found(path)
        target = Path(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive) as zf, zf.open(path) as src, target.open("wb") as dst:
            for chunk in iter(lambda: src.read(64 * 1024), b""):
                dst.write(chunk)
        return target
