# src/jspack/core/traceability/manifest.py
"""
Manifest de execução — rastreabilidade forense de runs do jspack.

O Manifest de execução consolida, de forma determinística e auditável:
    - metadados da run (run_id, started_at, versão do jspack)
    - hash da configuração efetiva
    - estado incremental de cada Stage (status, duração, revisão do Snapshot)
    - Event Log ordenado de eventos explícitos

Não confundir com o manifest de checksums (`core.checksums`): aquele é um
arquivo versionado na raiz do repositório; este descreve uma única run.

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - O formato de persistência é JSON determinístico
    - Nenhum evento é emitido implicitamente

Invariantes:
    - `events` é sempre uma lista ordenada pela ordem de chamada
    - `stages` é sempre um dicionário indexado por stage_id
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Normaliza um timestamp para timezone-aware em UTC (naive é assumido UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    s = _ensure_tzaware_utc(start)
    e = _ensure_tzaware_utc(end)
    return max(0, int((e - s).total_seconds() * 1000))


@dataclass
class RunManifest:
    """
    Registro forense de uma run do pipeline.

    Campos principais:
        - run: metadados da execução (run_id, started_at, jspack_version)
        - inputs: hash da configuração efetiva
        - stages: estado incremental de cada Stage
        - events: Event Log ordenado
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    stages: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "stages": {k: dict(v) for k, v in self.stages.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunManifest":
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            stages={k: dict(v) for k, v in (data.get("stages", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_manifest(
    *,
    run_id: str,
    started_at: datetime,
    jspack_version: str,
    config_hash: str,
) -> RunManifest:
    """
    Cria o Manifest inicial de uma run.

    Esta função **não emite eventos implicitamente**: o Event Log inicia
    vazio e só é preenchido por `add_event`, `stage_started`,
    `stage_finished` ou `stage_failed`.
    """
    return RunManifest(
        run={
            "run_id": run_id,
            "started_at": _iso(started_at),
            "jspack_version": jspack_version,
        },
        inputs={"config_hash": config_hash},
    )


def add_event(
    manifest: RunManifest,
    *,
    event_type: str,
    ts: datetime,
    stage_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts)}
    if stage_id is not None:
        ev["stage_id"] = stage_id
    if payload is not None:
        ev["payload"] = payload
    manifest.events.append(ev)


def stage_started(manifest: RunManifest, *, stage_id: str, kind: str, ts: datetime) -> None:
    manifest.stages.setdefault(stage_id, {})
    manifest.stages[stage_id].update(
        {
            "stage_id": stage_id,
            "kind": kind,
            "status": "running",
            "started_at": _iso(ts),
        }
    )
    add_event(manifest, event_type="stage_started", ts=ts, stage_id=stage_id, payload={"kind": kind})


def stage_finished(
    manifest: RunManifest,
    *,
    stage_id: str,
    ts: datetime,
    result: Dict[str, Any],
) -> None:
    s = manifest.stages.setdefault(stage_id, {"stage_id": stage_id})

    started_iso = s.get("started_at")
    started_dt = datetime.fromisoformat(started_iso) if started_iso else ts

    status = result.get("status", "success")
    s.update(
        {
            "status": status,
            "finished_at": _iso(ts),
            "duration_ms": _ms_between(started_dt, ts),
            "summary": result.get("summary"),
            "metrics": result.get("metrics", {}) or {},
            "warnings": result.get("warnings", []) or [],
            "revision": result.get("revision"),
        }
    )
    add_event(
        manifest,
        event_type="stage_finished",
        ts=ts,
        stage_id=stage_id,
        payload={"status": status, "duration_ms": s["duration_ms"], "revision": s["revision"]},
    )


def stage_failed(manifest: RunManifest, *, stage_id: str, ts: datetime, error: Dict[str, Any]) -> None:
    s = manifest.stages.setdefault(stage_id, {"stage_id": stage_id})
    s.update(
        {
            "status": "failed",
            "finished_at": _iso(ts),
            "error": error,
        }
    )
    add_event(manifest, event_type="stage_failed", ts=ts, stage_id=stage_id, payload={"error": error})


def save_manifest(manifest: RunManifest, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def load_manifest(path: Path) -> RunManifest:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return RunManifest.from_dict(data)
