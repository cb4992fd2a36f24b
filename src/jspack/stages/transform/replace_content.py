# src/jspack/stages/transform/replace_content.py
"""Stage canônico: transform.replace_content (v1).

Substitui (regex) trechos de um arquivo e grava o resultado em `output`
(ou no próprio path de entrada, que então é substituído no commit).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from jspack.core.fileset import Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.stages.common import first_match, replaced_paths


@dataclass
class ReplaceContentStage:
    input: str
    match: str
    value: str
    output: Optional[str] = None
    id: str = "transform.replace_content"
    kind: StageKind = StageKind.TRANSFORM

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        source = first_match(snapshot, self.input, stage=self.id)
        target = self.output or source.path

        ctx.log(step_id=self.id, level="info", message=f"Replacing content of {source.name}")
        text, count = re.subn(self.match, self.value, source.read_text())

        area = ctx.staging_area(self)
        area.clear()
        area.write_text(target, text)

        return StageResult.commit(
            self,
            f"{count} replacement(s) in {target}",
            additions=area,
            removals=replaced_paths(snapshot, [target]),
            role=source.role,
            metrics={"replacements": count},
        )


def replace_content(input: str, match: str, value: str, output: Optional[str] = None) -> ReplaceContentStage:
    return ReplaceContentStage(input=input, match=match, value=value, output=output)
