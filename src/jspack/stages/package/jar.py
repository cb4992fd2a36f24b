# src/jspack/stages/package/jar.py
"""Stage canônico: package.jar (v1).

Empacota os arquivos de saída (papel `resource`, exceto outros `.jar`)
em um único jar adicionado ao fileset. Arquivos `source` ficam de fora.
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass

from jspack.core.fileset import Snapshot, files_not_by_extension, output_files
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.stages.common import replaced_paths

# Timestamp fixo para jars reprodutíveis
_EPOCH = (1980, 1, 1, 0, 0, 0)


@dataclass
class JarStage:
    file: str = "project.jar"
    id: str = "package.jar"
    kind: StageKind = StageKind.PACKAGE

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        members = files_not_by_extension(output_files(snapshot), [".jar"])

        area = ctx.staging_area(self)
        area.clear()
        with zipfile.ZipFile(area.path(self.file), "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for tracked in members:
                info = zipfile.ZipInfo(tracked.path, date_time=_EPOCH)
                info.compress_type = zipfile.ZIP_DEFLATED
                zf.writestr(info, tracked.read_bytes())

        ctx.log(step_id=self.id, level="info", message=f"Writing {self.file} ({len(members)} files)")
        return StageResult.commit(
            self,
            f"packaged {len(members)} files",
            additions=area,
            removals=replaced_paths(snapshot, [self.file]),
            metrics={"files": len(members)},
        )


def jar(file: str = "project.jar") -> JarStage:
    return JarStage(file=file)
