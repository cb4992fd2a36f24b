# src/jspack/stages/metadata/deps_cljs.py
"""Stage canônico: metadata.deps_cljs (v1).

Gera `deps.cljs` descrevendo a foreign lib empacotada a partir do fileset:
    - primeiro `.inc.js` não minificado → `:file`
    - primeiro `.min.inc.js`            → `:file-min`
    - todos os `.ext.js`                → `:externs`

`:provides` vem de `provides` (ou `[name]`); `:requires` e
`:global-exports` são repassados quando informados.

Regras de validação (ValidationError):
    - `provides` ou `name` é obrigatório
    - ao menos um `.inc.js`
    - ao menos um `.ext.js`, exceto com `no_externs=True`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from jspack.core import errors
from jspack.core.exceptions import ValidationError
from jspack.core.fileset import Snapshot, files_by_extension, files_not_by_extension
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.stages.common import replaced_paths

from . import edn

DEPS_FILE = "deps.cljs"


def render_deps_cljs(lib: Mapping[str, Any], externs: Sequence[str] = ()) -> str:
    entries = ",\n   ".join(f"{edn.dumps(edn.Keyword(k))} {edn.dumps(v)}" for k, v in lib.items())
    text = "{:foreign-libs\n [{" + entries + "}]"
    if externs:
        text += ",\n :externs " + edn.dumps(list(externs))
    return text + "}\n"


@dataclass
class DepsCljsStage:
    name: Optional[str] = None
    provides: Sequence[str] = ()
    requires: Sequence[str] = ()
    global_exports: Mapping[str, str] = field(default_factory=dict)
    no_externs: bool = False
    id: str = "metadata.deps_cljs"
    kind: StageKind = StageKind.METADATA

    def _invalid(self, reason: str, **details: Any) -> ValidationError:
        return ValidationError.from_payload(errors.validation_error(reason=reason, stage=self.id, details=details))

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        regular = files_by_extension(files_not_by_extension(snapshot, [".min.inc.js"]), [".inc.js"])
        minified = files_by_extension(snapshot, [".min.inc.js"])
        externs = files_by_extension(snapshot, [".ext.js"])

        if not (self.provides or self.name):
            raise self._invalid("Either list of provides or a name has to be provided.")
        if not regular:
            raise self._invalid("No .inc.js file found!")
        if not self.no_externs and not externs:
            raise self._invalid("No .ext.js file(s) found!")

        lib: Dict[str, Any] = {
            "file": regular[0].path,
            "provides": list(self.provides) or [self.name],
        }
        if self.requires:
            lib["requires"] = list(self.requires)
        if minified:
            lib["file-min"] = minified[0].path
        if self.global_exports:
            lib["global-exports"] = {
                edn.Symbol(k): edn.Symbol(v) for k, v in sorted(self.global_exports.items())
            }

        extern_paths: List[str] = [f.path for f in externs]
        text = render_deps_cljs(lib, extern_paths)
        ctx.log(step_id=self.id, level="info", message=f"Writing {DEPS_FILE}")
        ctx.log(step_id=self.id, level="debug", message=f"{DEPS_FILE}:\n{text}")

        area = ctx.staging_area(self)
        area.clear()
        area.write_text(DEPS_FILE, text)

        return StageResult.commit(
            self,
            f"wrote {DEPS_FILE}",
            additions=area,
            removals=replaced_paths(snapshot, [DEPS_FILE]),
            payload={"file": lib["file"], "file-min": lib.get("file-min"), "externs": extern_paths},
        )


def deps_cljs(
    name: Optional[str] = None,
    provides: Sequence[str] = (),
    requires: Sequence[str] = (),
    global_exports: Optional[Mapping[str, str]] = None,
    no_externs: bool = False,
) -> DepsCljsStage:
    return DepsCljsStage(
        name=name,
        provides=tuple(provides),
        requires=tuple(requires),
        global_exports=dict(global_exports or {}),
        no_externs=no_externs,
    )
