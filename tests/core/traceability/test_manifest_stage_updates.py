# tests/core/traceability/test_manifest_stage_updates.py
"""
Testes de atualização incremental de Stages no Manifest de execução.

Os testes garantem que:
- Stages são registrados apenas quando eventos explícitos ocorrem
- Transições de status (running, success, failed) são consolidadas
- Duração é derivada de timestamps fornecidos externamente
- Informações de erro são registradas em caso de falha

Decisões arquiteturais:
    - O Manifest não emite eventos implicitamente
    - Atualizações ocorrem apenas via `stage_started`, `stage_finished`
      e `stage_failed`

Limites explícitos:
    - Não valida integração com o Engine (ver `tests/core/engine`)
"""

from datetime import datetime, timedelta, timezone

import pytest

try:
    from jspack.core.traceability import (
        add_event,
        create_manifest,
        stage_failed,
        stage_finished,
        stage_started,
    )
except Exception as e:
    create_manifest = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Falha ao importar APIs de traceability: {_IMPORT_ERR}")


T0 = datetime(2026, 1, 16, 12, 0, 0, tzinfo=timezone.utc)


def _manifest():
    return create_manifest(run_id="r-1", started_at=T0, jspack_version="0.4.0", config_hash="abc")


def test_create_manifest_has_no_events():
    _require_imports()
    m = _manifest()

    assert m.run == {"run_id": "r-1", "started_at": T0.isoformat(), "jspack_version": "0.4.0"}
    assert m.inputs == {"config_hash": "abc"}
    assert m.stages == {}
    assert m.events == []


def test_naive_timestamps_are_assumed_utc():
    _require_imports()
    m = create_manifest(
        run_id="r", started_at=datetime(2026, 1, 16, 12, 0, 0), jspack_version="x", config_hash="h"
    )
    assert m.run["started_at"].endswith("+00:00")


def test_started_then_finished_consolidates_state():
    _require_imports()
    m = _manifest()
    stage_started(m, stage_id="transform.minify", kind="transform", ts=T0)
    stage_finished(
        m,
        stage_id="transform.minify",
        ts=T0 + timedelta(milliseconds=1500),
        result={"status": "success", "summary": "ok", "metrics": {"bytes": 10}, "revision": 3},
    )

    s = m.stages["transform.minify"]
    assert s["status"] == "success"
    assert s["kind"] == "transform"
    assert s["duration_ms"] == 1500
    assert s["metrics"] == {"bytes": 10}
    assert s["warnings"] == []
    assert s["revision"] == 3
    assert [e["event_type"] for e in m.events] == ["stage_started", "stage_finished"]


def test_failed_records_error():
    _require_imports()
    m = _manifest()
    stage_started(m, stage_id="fetch.download", kind="source", ts=T0)
    stage_failed(m, stage_id="fetch.download", ts=T0, error={"type": "EXECUTION_ERROR"})

    assert m.stages["fetch.download"]["status"] == "failed"
    assert m.stages["fetch.download"]["error"] == {"type": "EXECUTION_ERROR"}
    assert m.events[-1]["payload"] == {"error": {"type": "EXECUTION_ERROR"}}


def test_add_event_preserves_call_order():
    _require_imports()
    m = _manifest()
    add_event(m, event_type="b", ts=T0)
    add_event(m, event_type="a", ts=T0, stage_id="s", payload={"k": 1})

    assert [e["event_type"] for e in m.events] == ["b", "a"]
    assert "stage_id" not in m.events[0]
    assert m.events[1]["payload"] == {"k": 1}
