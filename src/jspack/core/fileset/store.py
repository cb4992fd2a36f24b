# src/jspack/core/fileset/store.py
"""
SnapshotStore — commit de StagingAreas em novos Snapshots.

O store é dono de um diretório de objetos da run. Em cada commit, apenas
as adições são materializadas (copiadas da StagingArea para um diretório
exclusivo da nova revisão); arquivos não afetados continuam apontando
para o mesmo conteúdo em disco, sem cópia.

Invariantes:
    - `commit` nunca altera o Snapshot base
    - Um path adicionado que já existe na base e não foi removido no mesmo
      commit gera `ConflictError`
    - Revisões são monotônicas dentro de um store
"""

from __future__ import annotations

import shutil
import threading
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from jspack.core import errors
from jspack.core.exceptions import ConflictError

from .model import Role, Snapshot, TrackedFile, normalize_path
from .staging import StagingArea


class SnapshotStore:
    """Store de objetos de uma run do pipeline."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self._revision = 0
        self._lock = threading.Lock()

    def _next_revision(self) -> int:
        with self._lock:
            self._revision += 1
            return self._revision

    def commit(
        self,
        base: Snapshot,
        removals: Iterable[str] = (),
        additions: Optional[StagingArea] = None,
        *,
        role: Role = Role.RESOURCE,
        roles: Optional[Mapping[str, Role]] = None,
    ) -> Snapshot:
        """
        Retorna `base` menos `removals` mais todo arquivo sob `additions`.

        Paths das adições são relativos à raiz da StagingArea. Cada adição
        recebe `roles[path]` quando presente, senão `role`.

        Raises:
            ConflictError: se uma adição colide com um path da base que não
                está em `removals`.
        """
        removed = {normalize_path(p) for p in removals}
        by_path = {normalize_path(p): r for p, r in (roles or {}).items()}
        staged = list(additions.files()) if additions is not None else []

        conflicts = [rel for rel, _ in staged if rel in base and rel not in removed]
        if conflicts:
            raise ConflictError.from_payload(
                errors.conflict(paths=conflicts, stage=additions.owner if additions else None)
            )

        revision = self._next_revision()
        kept = [f for f in base.files if f.path not in removed]

        added = []
        if staged:
            rev_root = self.root / f"rev-{revision:05d}"
            for rel, source in staged:
                target = rev_root.joinpath(*rel.split("/"))
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(source, target)
                added.append(TrackedFile(path=rel, source=target, role=by_path.get(rel, role)))

        return Snapshot.of(kept + added, revision=revision)

    def close(self) -> None:
        shutil.rmtree(self.root, ignore_errors=True)
