# src/jspack/stages/files/move.py
"""Stage canônico: files.move (v1).

Renomeia arquivos cujo path casa com uma regex: o novo path é
`re.sub(regex, destino, path)`. O primeiro padrão que casa vence.

Invariantes:
- cada arquivo movido mantém o seu papel (source, resource, ...)
- dois arquivos movidos para o mesmo destino geram ConflictError
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Mapping

from jspack.core import errors
from jspack.core.exceptions import ConflictError
from jspack.core.fileset import Role, Snapshot, normalize_path
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult


@dataclass
class MoveStage:
    moves: Mapping[str, str] = field(default_factory=dict)
    id: str = "files.move"
    kind: StageKind = StageKind.TRANSFORM

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        compiled = [(re.compile(p), target) for p, target in self.moves.items()]

        renamed: Dict[str, str] = {}
        roles: Dict[str, Role] = {}
        for tracked in snapshot:
            for rx, target in compiled:
                if rx.search(tracked.path):
                    new = normalize_path(rx.sub(target, tracked.path))
                    if new in roles:
                        origins = sorted(old for old, dest in renamed.items() if dest == new)
                        raise ConflictError.from_payload(
                            errors.conflict(
                                paths=[new],
                                stage=self.id,
                                hint=f"{', '.join(origins + [tracked.path])} seriam movidos para {new}",
                            )
                        )
                    renamed[tracked.path] = new
                    roles[new] = tracked.role
                    break

        if not renamed:
            return StageResult.unchanged(self, "nothing to move")

        area = ctx.staging_area(self)
        area.clear()
        for old, new in renamed.items():
            area.copy_in(snapshot.get(old).source, new)
            ctx.log(step_id=self.id, level="debug", message=f"Moving {old} to {new}")

        return StageResult.commit(
            self,
            f"moved {len(renamed)} files",
            additions=area,
            removals=renamed.keys(),
            roles=roles,
            metrics={"files": len(renamed)},
            payload={"moved": dict(sorted(renamed.items()))},
        )


def move(moves: Mapping[str, str]) -> MoveStage:
    return MoveStage(moves=dict(moves))
