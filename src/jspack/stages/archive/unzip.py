# src/jspack/stages/archive/unzip.py
"""Stage canônico: archive.unzip (v1).

Responsabilidades:
- extrair arquivos zip nomeados (diretórios ignorados)
- remover os próprios arquivos zip do fileset no mesmo commit

Invariantes:
- uma entrada com o mesmo path em dois arquivos zip gera ConflictError
- entradas que escapariam da raiz (`../x`) geram ValidationError
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable

from jspack.core import errors
from jspack.core.exceptions import ConflictError, NotFoundError, ValidationError
from jspack.core.fileset import Snapshot, normalize_path
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult


@dataclass
class UnzipStage:
    paths: FrozenSet[str] = field(default_factory=frozenset)
    id: str = "archive.unzip"
    kind: StageKind = StageKind.ARCHIVE

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        archives = [f for f in snapshot if f.path in self.paths]
        missing = sorted(set(self.paths) - {f.path for f in archives})
        if missing:
            raise NotFoundError.from_payload(errors.not_found(resource=", ".join(missing), stage=self.id))

        area = ctx.staging_area(self)
        area.clear()

        seen: Dict[str, str] = {}
        for archive in archives:
            try:
                zf = zipfile.ZipFile(archive.source)
            except zipfile.BadZipFile as exc:
                raise ValidationError.from_payload(
                    errors.validation_error(
                        reason=f"{archive.path} não é um arquivo zip válido",
                        stage=self.id,
                        details={"path": archive.path},
                    )
                ) from exc

            with zf:
                entries = [info for info in zf.infolist() if not info.is_dir()]
                ctx.log(step_id=self.id, level="info", message=f"Extracting {len(entries)} files", archive=archive.path)
                for info in entries:
                    rel = self._entry_path(archive.path, info.filename)
                    if rel in seen:
                        raise ConflictError.from_payload(
                            errors.conflict(
                                paths=[rel],
                                stage=self.id,
                                hint=f"{rel} existe em {seen[rel]} e em {archive.path}; extraia-os em stages separados",
                            )
                        )
                    seen[rel] = archive.path
                    with zf.open(info) as src, area.path(rel).open("wb") as dst:
                        for chunk in iter(lambda: src.read(64 * 1024), b""):
                            dst.write(chunk)

        extracted = len(seen)

        return StageResult.commit(
            self,
            f"extracted {extracted} files",
            additions=area,
            removals=[a.path for a in archives],
            metrics={"archives": len(archives), "files": extracted},
        )

    def _entry_path(self, archive: str, name: str) -> str:
        try:
            return normalize_path(name)
        except ValueError as exc:
            raise ValidationError.from_payload(
                errors.validation_error(
                    reason=f"{archive} contém uma entrada insegura: {name}",
                    stage=self.id,
                    details={"path": archive, "entry": name},
                )
            ) from exc


def unzip(paths: Iterable[str]) -> UnzipStage:
    return UnzipStage(paths=frozenset(paths))
