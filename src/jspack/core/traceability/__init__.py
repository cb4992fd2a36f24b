# src/jspack/core/traceability/__init__.py
"""
Rastreabilidade de runs do jspack — Manifest de execução.

API pública:
    - RunManifest     → estrutura canônica
    - create_manifest → criação explícita
    - add_event       → registro explícito no Event Log
    - stage_started / stage_finished / stage_failed
    - save_manifest / load_manifest → persistência JSON
"""

from .manifest import (
    RunManifest,
    add_event,
    create_manifest,
    load_manifest,
    save_manifest,
    stage_failed,
    stage_finished,
    stage_started,
)

__all__ = [
    "RunManifest",
    "add_event",
    "create_manifest",
    "load_manifest",
    "save_manifest",
    "stage_failed",
    "stage_finished",
    "stage_started",
]
