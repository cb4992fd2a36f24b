# src/jspack/stages/fetch/download.py
"""Stage canônico: fetch.download (v1).

Responsabilidades:
- baixar uma URL para a StagingArea do Stage, dentro de um contexto
  isolado que carrega o cliente HTTP
- compor, quando pedido, verificação de checksum, extração e renomeação

Ordem da composição (fail fast):
    download → verify.checksum → archive.unzip → archive.decompress → files.move

Limites explícitos (v1):
- NÃO faz retry nem backoff
- NÃO segue autenticação; apenas GET simples
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from jspack.core import errors
from jspack.core.engine import Pipeline, compose
from jspack.core.exceptions import ValidationError
from jspack.core.fileset import Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult
from jspack.stages.archive import DecompressStage, UnzipStage
from jspack.stages.common import url_file_name
from jspack.stages.files import MoveStage
from jspack.stages.verify import VerifyChecksumStage

DOWNLOAD_DEPENDENCIES = frozenset({"requests"})

DOWNLOAD_OP = "jspack.remote.download:download"


@dataclass
class DownloadStage:
    """Baixa `url` como `name` para o fileset."""

    url: str
    name: str
    id: str = "fetch.download"
    kind: StageKind = StageKind.SOURCE

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        timeout = (ctx.config.get("download", {}) or {}).get("timeout_seconds")
        timeout = ctx.stage_config(self.id).get("timeout_seconds", timeout)

        area = ctx.staging_area(self)
        area.clear()

        ctx.log(step_id=self.id, level="info", message=f"Downloading {self.name}", url=self.url)
        info = ctx.isolated(DOWNLOAD_DEPENDENCIES).invoke(
            DOWNLOAD_OP, self.url, str(area.root), self.name, timeout=timeout
        )

        return StageResult.commit(
            self,
            f"downloaded {self.name}",
            additions=area,
            metrics={"bytes": int(info.get("bytes", 0))},
            payload={"url": self.url, "name": self.name},
        )


def download(
    url: str,
    name: Optional[str] = None,
    checksum: Optional[str] = None,
    unzip: bool = False,
    decompress: bool = False,
    compression_format: Optional[str] = None,
    archive_format: Optional[str] = None,
    target: Optional[str] = None,
) -> Pipeline:
    fname = name or url_file_name(url)
    if not fname:
        raise ValidationError.from_payload(
            errors.validation_error(
                reason=f"Não foi possível derivar o nome do arquivo de {url!r}",
                stage="fetch.download",
                hint="Informe `name` explicitamente.",
            )
        )

    stages = [DownloadStage(url=url, name=fname)]
    if checksum:
        stages.append(VerifyChecksumStage(sums={fname: checksum}, deprecated=True))
    if unzip:
        stages.append(UnzipStage(paths=frozenset({fname})))
    if decompress:
        stages.append(
            DecompressStage(
                paths=frozenset({fname}),
                compression_format=compression_format,
                archive_format=archive_format,
            )
        )
    if target:
        stages.append(MoveStage(moves={f"^{re.escape(fname)}$": target}))
    return compose(*stages, id="fetch.download")
