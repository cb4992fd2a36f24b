# src/jspack/stages/archive/decompress.py
"""Stage canônico: archive.decompress (v1).

Extrai tar/zip (opcionalmente comprimidos com gzip, bzip2 ou xz/lzma) ou
descomprime um arquivo isolado. A decodificação roda em contexto isolado
e os arquivos de origem saem do fileset no mesmo commit.

Dois arquivos que produzem o mesmo path relativo geram ConflictError;
o stage falha antes do commit, então nenhum conteúdo é perdido em
silêncio.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional

from jspack.core import errors
from jspack.core.exceptions import ConflictError, NotFoundError
from jspack.core.fileset import Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult

DECOMPRESS_OP = "jspack.remote.decompress:decompress"


@dataclass
class DecompressStage:
    paths: FrozenSet[str] = field(default_factory=frozenset)
    compression_format: Optional[str] = None
    archive_format: Optional[str] = None
    id: str = "archive.decompress"
    kind: StageKind = StageKind.ARCHIVE

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        archives = [f for f in snapshot if f.path in self.paths]
        missing = sorted(set(self.paths) - {f.path for f in archives})
        if missing:
            raise NotFoundError.from_payload(errors.not_found(resource=", ".join(missing), stage=self.id))

        area = ctx.staging_area(self)
        area.clear()
        sandbox = ctx.isolated()

        seen: Dict[str, str] = {}
        for archive in archives:
            ctx.log(step_id=self.id, level="info", message=f"Decompressing {archive.path}")
            files = sandbox.invoke(
                DECOMPRESS_OP,
                str(archive.source),
                str(area.root),
                compression_format=self.compression_format,
                archive_format=self.archive_format,
            )
            repeated = sorted(rel for rel in files if rel in seen)
            if repeated:
                raise ConflictError.from_payload(
                    errors.conflict(
                        paths=repeated,
                        stage=self.id,
                        hint=f"{archive.path} repete arquivos de {seen[repeated[0]]}; descomprima-os em stages separados",
                    )
                )
            seen.update((rel, archive.path) for rel in files)

        extracted = len(seen)

        return StageResult.commit(
            self,
            f"decompressed {extracted} files",
            additions=area,
            removals=[a.path for a in archives],
            metrics={"archives": len(archives), "files": extracted},
        )


def decompress(
    paths: Iterable[str],
    compression_format: Optional[str] = None,
    archive_format: Optional[str] = None,
) -> DecompressStage:
    return DecompressStage(
        paths=frozenset(paths),
        compression_format=compression_format,
        archive_format=archive_format,
    )
