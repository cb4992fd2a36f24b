# src/jspack/core/pipeline/__init__.py
"""
# Pipeline Core — jspack

Contratos e estruturas fundamentais de um pipeline:

- **types**: `StageStatus`, `StageKind`, `StageResult` (instrução de commit)
- **stage**: `Stage` (Protocol) — contrato mínimo de um Stage
- **context**: `RunContext` — recursos, configuração e log da run
- **memo**: `FingerprintMemo` — memoização chaveada por fingerprint

Stages não conhecem o Engine e não controlam a ordem de execução; toda
mudança no fileset passa pelo commit aplicado pelo Engine.
"""

from .context import RunContext
from .memo import FingerprintMemo
from .stage import Stage
from .types import StageKind, StageResult, StageStatus

__all__ = [
    "RunContext",
    "FingerprintMemo",
    "Stage",
    "StageKind",
    "StageResult",
    "StageStatus",
]
