# src/jspack/stages/transform/concat_preamble.py
"""Stage canônico: transform.concat_preamble (v1, legado).

Concatena todos os `.inc.js` do fileset (ordem de path, separados por
quebra de linha) em um único preâmbulo. A fábrica `concat_preamble`
compõe antes dele `source.dependencies`, trazendo os arquivos das
dependências resolvidas.
"""

from __future__ import annotations

from dataclasses import dataclass

from jspack.core.engine import Pipeline, compose
from jspack.core.fileset import Snapshot, files_by_extension
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.resolve import DependencyResolver
from jspack.stages.common import replaced_paths
from jspack.stages.source import DependenciesStage

DEFAULT_PREAMBLE = "preamble.js"


@dataclass
class ConcatPreambleStage:
    combined_preamble: str = DEFAULT_PREAMBLE
    id: str = "transform.concat_preamble"
    kind: StageKind = StageKind.TRANSFORM

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        inc = files_by_extension(snapshot, [".inc.js"])
        ctx.log(step_id=self.id, level="info", message=f"Found {len(inc)} .inc.js files")

        area = ctx.staging_area(self)
        area.clear()
        ctx.log(step_id=self.id, level="info", message=f"Adding combined .inc.js files as {self.combined_preamble}")
        area.write_text(self.combined_preamble, "\n".join(f.read_text() for f in inc))

        return StageResult.commit(
            self,
            f"combined {len(inc)} files",
            additions=area,
            removals=replaced_paths(snapshot, [self.combined_preamble]),
            metrics={"files": len(inc)},
        )


def concat_preamble(resolver: DependencyResolver, combined_preamble: str = DEFAULT_PREAMBLE) -> Pipeline:
    return compose(
        DependenciesStage(resolver=resolver),
        ConcatPreambleStage(combined_preamble=combined_preamble),
        id="transform.concat_preamble",
    )
