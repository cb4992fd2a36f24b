# src/jspack/stages/transform/minify.py
"""Stage canônico: transform.minify (v1).

Responsabilidades:
- localizar o arquivo de entrada (regex sobre paths, primeiro em ordem)
- escolher o minificador pela extensão: `JsAsset | CssAsset | Unsupported`
- executar o minificador em contexto isolado e gravar a saída

Limites explícitos (v1):
- NÃO implementa o algoritmo de minificação (rjsmin / rcssmin)
- `Unsupported` é erro de validação, nunca cópia silenciosa
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from jspack.core import errors
from jspack.core.exceptions import ValidationError
from jspack.core.fileset import Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.stages.common import first_match, replaced_paths

MINIFY_DEPENDENCIES = frozenset({"rjsmin", "rcssmin"})


@dataclass(frozen=True)
class JsAsset:
    path: str
    op: str = "jspack.remote.minify:minify_js"


@dataclass(frozen=True)
class CssAsset:
    path: str
    op: str = "jspack.remote.minify:minify_css"


@dataclass(frozen=True)
class Unsupported:
    path: str


Asset = Union[JsAsset, CssAsset, Unsupported]


def classify_asset(path: str) -> Asset:
    lowered = path.lower()
    if lowered.endswith(".js"):
        return JsAsset(path)
    if lowered.endswith(".css"):
        return CssAsset(path)
    return Unsupported(path)


@dataclass
class MinifyStage:
    input: str
    output: str
    language: Optional[str] = None
    id: str = "transform.minify"
    kind: StageKind = StageKind.TRANSFORM

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        source = first_match(snapshot, self.input, stage=self.id)
        asset = classify_asset(source.path)

        if isinstance(asset, Unsupported):
            raise ValidationError.from_payload(
                errors.validation_error(
                    reason=f"Não há minificador para {asset.path}",
                    stage=self.id,
                    details={"path": asset.path, "supported": [".js", ".css"]},
                )
            )

        area = ctx.staging_area(self)
        area.clear()
        out_path = area.path(self.output)

        kwargs = {}
        if isinstance(asset, JsAsset) and self.language:
            kwargs["language"] = self.language

        ctx.log(step_id=self.id, level="info", message=f"Minifying {source.name}")
        info = ctx.isolated(MINIFY_DEPENDENCIES).invoke(asset.op, str(source.source), str(out_path), **kwargs)

        return StageResult.commit(
            self,
            f"minified {source.path} -> {self.output}",
            additions=area,
            removals=replaced_paths(snapshot, [self.output]),
            metrics={
                "input_bytes": int(info.get("input_bytes", 0)),
                "output_bytes": int(info.get("output_bytes", 0)),
            },
            payload={"asset": type(asset).__name__, "input": source.path, "output": self.output},
        )


def minify(input: str, output: str, language: Optional[str] = None) -> MinifyStage:
    return MinifyStage(input=input, output=output, language=language)
