# src/jspack/stages/source/archive_file.py
"""Stage canônico: source.archive_file (v1).

Copia um arquivo nomeado das dependências resolvidas para `target`.
Com `package=True` o arquivo entra com papel `source` (entrada para
processamento, fora do artefato final).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from jspack.core.fileset import Role, Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.memo import FingerprintMemo
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.resolve import DependencyResolver


@dataclass
class ArchiveFileStage:
    resolver: DependencyResolver
    path: str
    target: Optional[str] = None
    package: bool = False
    id: str = "source.archive_file"
    kind: StageKind = StageKind.SOURCE
    memo: FingerprintMemo = field(default_factory=FingerprintMemo, repr=False)

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        area = ctx.staging_area(self)
        target = self.target or self.path
        fp = self.memo.fingerprint(
            {"dependencies": self.resolver.fingerprint(), "path": self.path, "target": target, "staging": str(area.root)}
        )

        if not self.memo.is_current(fp):
            area.clear()
            ctx.log(step_id=self.id, level="info", message=f"Adding {self.path} to fileset")
            self.resolver.extract(self.path, area.path(target))
            self.memo.record(fp)

        return StageResult.commit(
            self,
            f"added {target}",
            additions=area,
            role=Role.SOURCE if self.package else Role.RESOURCE,
            payload={"path": self.path, "target": target},
        )


def from_archive(
    resolver: DependencyResolver,
    path: str,
    target: Optional[str] = None,
    package: bool = False,
) -> ArchiveFileStage:
    return ArchiveFileStage(resolver=resolver, path=path, target=target, package=package)
