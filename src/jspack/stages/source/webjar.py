# src/jspack/stages/source/webjar.py
"""Stage canônico: source.webjar (v1).

Localiza um asset de webjar pelo nome curto `<lib>/<arquivo>` (sem a
versão) e o copia para `target`. O mapa de assets é calculado em
contexto isolado e memoizado pelo fingerprint das dependências.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from jspack.core import errors
from jspack.core.exceptions import NotFoundError
from jspack.core.fileset import Role, Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.memo import FingerprintMemo
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.resolve import DependencyResolver

ASSET_MAP_OP = "jspack.remote.webjars:asset_map"


@dataclass
class WebjarStage:
    resolver: DependencyResolver
    name: str
    target: Optional[str] = None
    package: bool = False
    id: str = "source.webjar"
    kind: StageKind = StageKind.SOURCE
    memo: FingerprintMemo = field(default_factory=FingerprintMemo, repr=False)

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        area = ctx.staging_area(self)
        target = self.target or self.name
        deps_fp = self.resolver.fingerprint()
        fp = self.memo.fingerprint({"dependencies": deps_fp, "name": self.name, "target": target, "staging": str(area.root)})

        if not self.memo.is_current(fp):
            assets: Dict[str, str] = ctx.isolated().invoke(ASSET_MAP_OP, self.resolver.archive_paths())
            entry = assets.get(self.name)
            if entry is None:
                raise NotFoundError.from_payload(
                    errors.not_found(
                        resource=self.name,
                        stage=self.id,
                        hint="Use o nome `<lib>/<arquivo>` de um webjar presente nas dependências.",
                    )
                )
            area.clear()
            ctx.log(step_id=self.id, level="info", message=f"Adding {entry} to fileset")
            self.resolver.extract(entry, area.path(target))
            self.memo.record(fp)

        return StageResult.commit(
            self,
            f"added {target}",
            additions=area,
            role=Role.SOURCE if self.package else Role.RESOURCE,
            payload={"name": self.name, "target": target},
        )


def from_webjar(
    resolver: DependencyResolver,
    name: str,
    target: Optional[str] = None,
    package: bool = False,
) -> WebjarStage:
    return WebjarStage(resolver=resolver, name=name, target=target, package=package)
