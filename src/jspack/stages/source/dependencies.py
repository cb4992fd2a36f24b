# src/jspack/stages/source/dependencies.py
"""Stage canônico: source.dependencies (v1).

Responsabilidades:
- procurar nas dependências resolvidas arquivos com os sufixos pedidos
  (por padrão `.inc.js`, `.ext.js`, `.lib.js`) e adicioná-los ao fileset

Memoização:
- a extração só é refeita quando o fingerprint das dependências (ou da
  StagingArea) muda; em um loop de watch a StagingArea já preenchida é
  reaproveitada

Limites explícitos (v1):
- NÃO resolve o grafo de dependências (recebe o resolver pronto)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from jspack.core.fileset import Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.memo import FingerprintMemo
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.resolve import DependencyResolver

DEPENDENCY_SUFFIXES = (".inc.js", ".ext.js", ".lib.js")


@dataclass
class DependenciesStage:
    resolver: DependencyResolver
    suffixes: Sequence[str] = DEPENDENCY_SUFFIXES
    id: str = "source.dependencies"
    kind: StageKind = StageKind.SOURCE
    memo: FingerprintMemo = field(default_factory=FingerprintMemo, repr=False)

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        area = ctx.staging_area(self)
        fp = self.memo.fingerprint(
            {
                "dependencies": self.resolver.fingerprint(),
                "suffixes": list(self.suffixes),
                "staging": str(area.root),
            }
        )

        reused = self.memo.is_current(fp)
        if not reused:
            area.clear()
            for path in self.resolver.list_matching_files(self.suffixes):
                ctx.log(step_id=self.id, level="info", message=f"Adding {path} to fileset")
                self.resolver.extract(path, area.path(path))
            self.memo.record(fp)

        count = sum(1 for _ in area.files())
        if count == 0:
            return StageResult.unchanged(self, "no dependency files found", payload={"reused": reused})

        return StageResult.commit(
            self,
            f"{count} dependency files",
            additions=area,
            metrics={"files": count},
            payload={"reused": reused},
        )


def from_dependencies(resolver: DependencyResolver, suffixes: Sequence[str] = DEPENDENCY_SUFFIXES) -> DependenciesStage:
    return DependenciesStage(resolver=resolver, suffixes=tuple(suffixes))
