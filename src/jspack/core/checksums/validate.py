# src/jspack/core/checksums/validate.py
"""
Stage canônico: validate.checksums (v1).

Máquina de estados de uma validação:
    1. Collect  → arquivos do Snapshot que casam com os padrões
    2. Digest   → MD5 em blocos, `{path: digest}` ordenado
    3. Load     → manifest persistido na raiz do repositório (ou "sem baseline")
    4. Compare  → sem baseline: aceita; igual: aceita;
                  divergente: CI rejeita sem perguntar, console pergunta
    5. Persist  → reescreve o arquivo sempre que difere do anterior,
                  mesmo quando a validação falha

Invariantes:
    - Uma divergência nunca é aceita em silêncio: ou é primeira execução,
      ou houve confirmação explícita, ou a run termina com
      `ChecksumMismatchError`
    - O Snapshot nunca é alterado por este Stage

Limites explícitos:
    - Não há lock do arquivo de checksums entre runs concorrentes
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from jspack.core import errors
from jspack.core.config.defaults import CHECKSUM_MANIFEST_FILE, DEFAULT_CHECKSUM_PATTERN
from jspack.core.exceptions import ChecksumMismatchError
from jspack.core.fileset import Snapshot, files_by_pattern
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult

from .ci import is_ci
from .confirm import PROMPT, AutoReject, ConfirmationSource, InteractiveConsole
from .digest import digest_files
from .manifest import diff_checksums, read_checksums, render_checksums, write_checksums


class ChecksumOutcome(str, Enum):
    FIRST_RUN = "first_run"
    MATCH = "match"
    CONFIRMED = "confirmed"


@dataclass
class ValidateChecksumsStage:
    """Compara digests do fileset com o manifest versionado."""

    patterns: Sequence[str] = ()
    manifest_file: Optional[str] = None
    id: str = "validate.checksums"
    kind: StageKind = StageKind.VERIFY

    def _settings(self, ctx: RunContext) -> Dict[str, Any]:
        cfg = dict((ctx.config or {}).get("checksums", {}) or {})
        cfg.update(ctx.stage_config(self.id))
        return cfg

    def _confirmation(self, ctx: RunContext, ci: bool) -> ConfirmationSource:
        if ci:
            return AutoReject()
        if ctx.confirmation is not None:
            return ctx.confirmation
        return InteractiveConsole(out=ctx.out)

    def run(self, ctx: RunContext, snapshot: Snapshot) -> StageResult:
        cfg = self._settings(ctx)
        patterns = list(self.patterns) or list(cfg.get("patterns") or [DEFAULT_CHECKSUM_PATTERN])
        manifest_name = self.manifest_file or cfg.get("manifest_file") or CHECKSUM_MANIFEST_FILE
        manifest_path = Path(ctx.project_root) / manifest_name

        files = files_by_pattern(snapshot, patterns)
        fresh = digest_files(files)
        prior = read_checksums(manifest_path)

        if prior is None:
            outcome = ChecksumOutcome.FIRST_RUN
            ctx.log(step_id=self.id, level="info", message="No checksum baseline, accepting current files")
        elif prior == fresh:
            outcome = ChecksumOutcome.MATCH
            ctx.log(step_id=self.id, level="info", message="Checksums match")
        else:
            diff = diff_checksums(prior, fresh)
            ctx.log(step_id=self.id, level="info", message="\nCurrent checksums:\n" + render_checksums(prior))
            ctx.log(step_id=self.id, level="info", message="\nNew checksums:\n" + render_checksums(fresh))

            ci = is_ci(ctx.environ, cfg)
            accepted = self._confirmation(ctx, ci).confirm(PROMPT)
            if not accepted:
                self._persist(ctx, manifest_path, manifest_name, fresh)
                raise ChecksumMismatchError.from_payload(
                    errors.checksum_mismatch(
                        changed=diff.changed,
                        added=diff.added,
                        removed=diff.removed,
                        manifest_file=manifest_name,
                        hint=(
                            "Revise o diff do arquivo de checksums e faça commit se as mudanças forem esperadas."
                            if ci
                            else "Reexecute e responda 'y' para aceitar os novos checksums."
                        ),
                    )
                )
            outcome = ChecksumOutcome.CONFIRMED

        if prior != fresh:
            self._persist(ctx, manifest_path, manifest_name, fresh)

        return StageResult.unchanged(
            self,
            f"checksums {outcome.value}",
            metrics={"files": len(fresh)},
            payload={"outcome": outcome.value, "manifest_file": str(manifest_path)},
        )

    def _persist(self, ctx: RunContext, path: Path, name: str, fresh: Dict[str, str]) -> None:
        write_checksums(path, fresh)
        ctx.add_warning(
            step_id=self.id,
            message=f"Checksum file ({name}) updated, please commit this file to version control.",
        )


def validate_checksums(patterns: Sequence[str] = (), manifest_file: Optional[str] = None) -> ValidateChecksumsStage:
    return ValidateChecksumsStage(patterns=tuple(patterns), manifest_file=manifest_file)
