# src/jspack/core/fileset/staging.py
"""
StagingArea — diretório temporário exclusivo de um Stage.

Um Stage escreve arquivos novos/modificados em sua StagingArea; esses
arquivos só se tornam TrackedFiles quando o Engine aplica o commit
retornado pelo Stage. A área funciona como buffer append-only e nunca é
compartilhada entre Stages.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Tuple, Union

from .model import normalize_path


@dataclass(frozen=True)
class StagingArea:
    root: Path
    owner: str

    def path(self, rel_path: str) -> Path:
        """Caminho absoluto para `rel_path`, criando os diretórios pais."""
        target = self.root.joinpath(*normalize_path(rel_path).split("/"))
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def write_bytes(self, rel_path: str, data: bytes) -> Path:
        target = self.path(rel_path)
        target.write_bytes(data)
        return target

    def write_text(self, rel_path: str, text: str, encoding: str = "utf-8") -> Path:
        target = self.path(rel_path)
        target.write_text(text, encoding=encoding)
        return target

    def copy_in(self, source: Union[str, Path], rel_path: str) -> Path:
        target = self.path(rel_path)
        shutil.copyfile(source, target)
        return target

    def files(self) -> Iterator[Tuple[str, Path]]:
        """Itera `(path relativo, caminho absoluto)` em ordem lexicográfica."""
        if not self.root.exists():
            return iter(())
        found = [
            (p.relative_to(self.root).as_posix(), p)
            for p in self.root.rglob("*")
            if p.is_file()
        ]
        return iter(sorted(found))

    def is_empty(self) -> bool:
        return next(self.files(), None) is None

    def clear(self) -> None:
        if self.root.exists():
            shutil.rmtree(self.root)
        self.root.mkdir(parents=True, exist_ok=True)
