# src/jspack/stages/verify/checksum.py
"""Stage canônico: verify.checksum (v1).

Confere o MD5 de arquivos nomeados contra valores esperados. Usado pelo
`fetch.download(checksum=...)`, que está depreciado em favor de
`validate.checksums` como último Stage do pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from jspack.core import errors
from jspack.core.checksums.digest import md5_hex
from jspack.core.exceptions import ChecksumMismatchError, NotFoundError
from jspack.core.fileset import Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult

DEPRECATION_KEY = "deprecations.download_checksum"

DEPRECATION_MESSAGE = (
    "Download checksum option is deprecated. Use validate.checksums as the "
    "last stage in the package pipeline instead."
)


@dataclass
class VerifyChecksumStage:
    sums: Mapping[str, str] = field(default_factory=dict)
    deprecated: bool = False
    id: str = "verify.checksum"
    kind: StageKind = StageKind.VERIFY

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        if self.deprecated and not ctx.meta.get(DEPRECATION_KEY):
            ctx.meta[DEPRECATION_KEY] = True
            ctx.add_warning(step_id=self.id, message=DEPRECATION_MESSAGE)

        verified: Dict[str, str] = {}
        for path, expected in sorted(self.sums.items()):
            tracked = snapshot.get(path)
            if tracked is None:
                raise NotFoundError.from_payload(errors.not_found(resource=path, stage=self.id))

            expected = expected.strip().upper()
            actual = md5_hex(tracked.source)
            if actual != expected:
                raise ChecksumMismatchError(
                    message=f"Checksum of file {path} is not {expected} but {actual}",
                    details={"stage": self.id, "path": path, "expected": expected, "actual": actual},
                    hint="Confira a URL/versão baixada ou atualize o checksum esperado.",
                )
            verified[path] = actual

        return StageResult.unchanged(self, f"{len(verified)} checksum(s) verified", metrics={"files": len(verified)})


def checksum(sums: Mapping[str, str]) -> VerifyChecksumStage:
    return VerifyChecksumStage(sums=dict(sums))
