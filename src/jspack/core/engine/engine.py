# src/jspack/core/engine/engine.py
"""
Engine de execução do pipeline do jspack.

O Engine percorre uma sequência ordenada de Stages, entregando a cada um
o Snapshot produzido pelo anterior e aplicando, após cada Stage, o commit
que ele devolveu (remoções + StagingArea) no SnapshotStore da run.

Política de erros:
    - Não há retry nem modo de sucesso parcial
    - A primeira falha interrompe a run com `StageError`, que carrega o
      id do Stage, a causa original (`__cause__`) e o último Snapshot
      commitado com sucesso
    - Exceções são convertidas em JspackErrorPayload e registradas no
      Manifest de execução antes de propagar

Composição:
    `compose` achata composições aninhadas, de modo que
    `compose(a, compose(b, c)) == compose(compose(a, b), c)` e executar a
    composição é idêntico a encadear os Stages manualmente. Cada Stage
    achatado lembra os ids das composições que o envolviam: desabilitar
    uma composição por config (`stages: {<id>: {enabled: false}}`) pula
    todos os seus filhos.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import jspack
from jspack.core import errors
from jspack.core.config.hashing import compute_config_hash
from jspack.core.errors import JspackErrorPayload
from jspack.core.exceptions import JspackException, StageError
from jspack.core.fileset import Snapshot
from jspack.core.pipeline.context import RunContext
from jspack.core.pipeline.types import StageKind, StageResult, StageStatus
from jspack.core.traceability import (
    RunManifest,
    create_manifest,
    stage_failed,
    stage_finished,
    stage_started,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Pipeline:
    """Composição ordenada (e já achatada) de Stages.

    `scopes[i]` guarda os ids das composições aninhadas que envolviam
    `stages[i]` antes do achatamento; não participa da igualdade.
    """

    stages: Tuple[Any, ...]
    id: str = "pipeline"
    kind: StageKind = StageKind.COMPOSITE
    scopes: Tuple[Tuple[str, ...], ...] = field(default=(), compare=False)

    def scoped(self) -> List[Tuple[Any, Tuple[str, ...]]]:
        scopes = self.scopes or ((),) * len(self.stages)
        return [(stage, (self.id,) + scope) for stage, scope in zip(self.stages, scopes)]

    def __iter__(self):
        return iter(self.stages)

    def __len__(self) -> int:
        return len(self.stages)

    def execute(self, ctx: RunContext, snapshot: Optional[Snapshot] = None) -> Snapshot:
        return Engine(ctx=ctx).run(self, snapshot).snapshot


def _flatten(stages: Iterable[Any]) -> List[Tuple[Any, Tuple[str, ...]]]:
    """Achata composições em pares `(stage, ids das composições envolventes)`."""
    flat: List[Tuple[Any, Tuple[str, ...]]] = []
    for stage in stages:
        if isinstance(stage, Pipeline):
            flat.extend(stage.scoped())
        elif isinstance(stage, (list, tuple)):
            flat.extend(_flatten(stage))
        else:
            flat.append((stage, ()))
    return flat


def compose(*stages: Any, id: str = "pipeline") -> Pipeline:
    """Compõe Stages (ou composições) em uma única composição ordenada."""
    flat = _flatten(stages)
    return Pipeline(
        stages=tuple(stage for stage, _ in flat),
        id=id,
        scopes=tuple(scope for _, scope in flat),
    )


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma execução bem-sucedida."""

    snapshot: Snapshot
    results: Tuple[StageResult, ...] = ()
    manifest: Optional[RunManifest] = None
    history: Tuple[Snapshot, ...] = field(default=())


class Engine:
    """Engine canônico do jspack (executor sequencial fail-fast)."""

    def __init__(self, *, ctx: RunContext, manifest: Optional[RunManifest] = None):
        self.ctx = ctx
        self.manifest = manifest or create_manifest(
            run_id=ctx.run_id,
            started_at=ctx.created_at,
            jspack_version=jspack.__version__,
            config_hash=compute_config_hash(ctx.config),
        )
        self._keys: Dict[str, int] = {}

    def _is_enabled(self, stage_id: str) -> bool:
        return bool(self.ctx.stage_config(stage_id).get("enabled", True))

    def _manifest_key(self, stage_id: str) -> str:
        n = self._keys.get(stage_id, 0) + 1
        self._keys[stage_id] = n
        return stage_id if n == 1 else f"{stage_id}#{n}"

    def _exception_to_error(self, stage_id: str, exc: Exception) -> JspackErrorPayload:
        """Converte exceções em JspackErrorPayload (serializável, acionável)."""
        if isinstance(exc, JspackException):
            payload = exc.to_payload()
            details = dict(payload.details)
            if details.get("stage") is None:
                details["stage"] = stage_id
            return replace(payload, details=details)

        if isinstance(exc, TypeError) and "must return StageResult" in str(exc):
            return errors.engine_configuration_error(
                message="Stage retornou tipo inválido",
                details={"stage": stage_id, "expected": "StageResult"},
                hint="Ajuste o Stage para retornar StageResult",
            )

        return errors.engine_execution_error(
            stage=stage_id,
            exc_type=exc.__class__.__name__,
            exc_message=str(exc),
        )

    def _merge_warnings(self, result: StageResult) -> StageResult:
        merged: List[str] = []
        for msg in list(result.warnings) + list(self.ctx.warnings.get(result.stage_id, [])):
            if msg not in merged:
                merged.append(msg)
        return replace(result, warnings=merged)

    def run(self, stage: Any, initial: Optional[Snapshot] = None) -> RunResult:
        stages = _flatten([stage])
        current = initial if initial is not None else Snapshot.empty()
        results: List[StageResult] = []
        history: List[Snapshot] = [current]

        for s, scope in stages:
            sid = s.id
            key = self._manifest_key(sid)
            kind = getattr(getattr(s, "kind", None), "value", str(getattr(s, "kind", "")))

            disabled = [i for i in scope + (sid,) if not self._is_enabled(i)]
            if disabled:
                reason = "skipped by config" if disabled == [sid] else f"skipped by config ({disabled[0]})"
                skipped = StageResult.unchanged(s, reason, status=StageStatus.SKIPPED)
                results.append(skipped)
                stage_started(self.manifest, stage_id=key, kind=kind, ts=_now())
                stage_finished(
                    self.manifest,
                    stage_id=key,
                    ts=_now(),
                    result={"status": "skipped", "summary": skipped.summary, "revision": current.revision},
                )
                continue

            stage_started(self.manifest, stage_id=key, kind=kind, ts=_now())
            try:
                result = s.run(self.ctx, current)
                if not isinstance(result, StageResult):
                    raise TypeError("Stage.run(ctx, snapshot) must return StageResult")
                if result.changes_fileset:
                    committed = self.ctx.store.commit(
                        current,
                        result.removals,
                        result.additions,
                        role=result.role,
                        roles=result.roles,
                    )
                else:
                    committed = current
            except Exception as exc:
                error = self._exception_to_error(sid, exc)
                stage_failed(self.manifest, stage_id=key, ts=_now(), error=error.to_dict())
                self.ctx.log(step_id=sid, level="error", message=f"{sid}: {error.message}")
                raise StageError(
                    message=f"Stage '{sid}' falhou: {error.message}",
                    details={"stage": sid, "error": error.to_dict()},
                    hint=error.hint,
                    decision_required=error.decision_required,
                    stage=sid,
                    snapshot=current,
                ) from exc

            result = self._merge_warnings(result)
            results.append(result)
            stage_finished(
                self.manifest,
                stage_id=key,
                ts=_now(),
                result={
                    "status": result.status.value,
                    "summary": result.summary,
                    "metrics": result.metrics,
                    "warnings": result.warnings,
                    "revision": committed.revision,
                },
            )
            current = committed
            history.append(current)

        return RunResult(
            snapshot=current,
            results=tuple(results),
            manifest=self.manifest,
            history=tuple(history),
        )


def run(stage: Any, initial: Optional[Snapshot] = None, *, ctx: RunContext) -> Snapshot:
    """Executa `stage` (primitivo ou composto) e devolve o Snapshot final."""
    return Engine(ctx=ctx).run(stage, initial).snapshot


def run_all(stages: Sequence[Any], initial: Optional[Snapshot] = None, *, ctx: RunContext) -> Snapshot:
    return run(compose(*stages), initial, ctx=ctx)
