# src/jspack/stages/validate/libs.py
"""Stage canônico: validate.libs (v1).

Roda depois que o jar foi gerado: para cada `.jar` de saída, confere em
contexto isolado que os arquivos referenciados pelo `deps.cljs` existem
no conjunto de jars e não estão vazios.
"""

from __future__ import annotations

from dataclasses import dataclass

from jspack.core import errors
from jspack.core.exceptions import ValidationError
from jspack.core.fileset import Snapshot, files_by_extension, output_files
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult

VALIDATE_LIBS_OP = "jspack.remote.libs:validate_libs"


@dataclass
class ValidateLibsStage:
    id: str = "validate.libs"
    kind: StageKind = StageKind.VERIFY

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        jars = files_by_extension(output_files(snapshot), [".jar"])
        if not jars:
            raise ValidationError.from_payload(
                errors.validation_error(
                    reason="validate.libs needs to be run after the jar has been built.",
                    stage=self.id,
                    hint="Posicione validate.libs depois do Stage que gera o jar.",
                )
            )

        ctx.log(step_id=self.id, level="info", message="Validating externs and foreign-libs of built jars")
        report = ctx.isolated().invoke(VALIDATE_LIBS_OP, [str(j.source) for j in jars])

        problems = report.get("problems") or []
        if problems:
            raise ValidationError.from_payload(
                errors.validation_error(
                    reason=f"{len(problems)} problema(s) em deps.cljs",
                    stage=self.id,
                    details={"problems": problems},
                    hint="Confira os paths de :file, :file-min e :externs do deps.cljs.",
                )
            )

        return StageResult.unchanged(
            self,
            f"{len(jars)} jar(s) valid",
            metrics={"jars": len(jars), "references": int(report.get("checked", 0))},
        )


def validate_libs() -> ValidateLibsStage:
    return ValidateLibsStage()
