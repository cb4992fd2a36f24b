# src/jspack/core/pipeline/types.py
"""
Tipos canônicos do pipeline do jspack.

Componentes principais:
    - StageStatus → estados finais de execução (SUCCESS, SKIPPED, FAILED)
    - StageKind   → classificação semântica de Stages
    - StageResult → instrução de commit imutável produzida por um Stage

Um Stage não altera o Snapshot: ele devolve um `StageResult` dizendo
quais paths remover e qual StagingArea adicionar, e o Engine aplica o
commit. Nenhuma lógica de execução vive neste módulo.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from jspack.core.fileset import Role, StagingArea


class StageKind(str, Enum):
    """
    Tipos semânticos de Stages.

        - SOURCE: traz arquivos para o fileset (download, dependências)
        - ARCHIVE: expande arquivos compactados
        - TRANSFORM: produz arquivos derivados (minify, replace, concat)
        - METADATA: gera metadados descritivos (deps.cljs)
        - PACKAGE: empacota a saída em um artefato distribuível (jar)
        - VERIFY: valida sem alterar o fileset (checksums, libs)
        - COMPOSITE: composição ordenada de outros Stages

    O valor é puramente informativo; o Engine não decide nada com base nele.
    """

    SOURCE = "source"
    ARCHIVE = "archive"
    TRANSFORM = "transform"
    METADATA = "metadata"
    PACKAGE = "package"
    VERIFY = "verify"
    COMPOSITE = "composite"


class StageStatus(str, Enum):
    """Estados finais possíveis da execução de um Stage."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StageResult:
    """
    Resultado imutável da execução de um Stage.

    Campos:
        - stage_id: identificador do Stage
        - kind: tipo semântico do Stage
        - status: estado final
        - summary: resumo textual
        - removals: paths a remover do Snapshot base
        - additions: StagingArea cujos arquivos entram no Snapshot (ou None)
        - role: papel dos arquivos adicionados
        - roles: papel por path adicionado, sobrepõe `role` quando presente
        - metrics: métricas numéricas produzidas pelo Stage
        - warnings: avisos não fatais
        - payload: dados adicionais livres (serializáveis)
    """

    stage_id: str
    kind: StageKind
    status: StageStatus
    summary: str
    removals: FrozenSet[str] = frozenset()
    additions: Optional[StagingArea] = None
    role: Role = Role.RESOURCE
    roles: Dict[str, Role] = field(default_factory=dict)
    metrics: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def changes_fileset(self) -> bool:
        return bool(self.removals) or self.additions is not None

    @classmethod
    def commit(
        cls,
        stage: Any,
        summary: str,
        *,
        additions: Optional[StagingArea] = None,
        removals: Iterable[str] = (),
        role: Role = Role.RESOURCE,
        roles: Optional[Mapping[str, Role]] = None,
        metrics: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> "StageResult":
        return cls(
            stage_id=stage.id,
            kind=stage.kind,
            status=StageStatus.SUCCESS,
            summary=summary,
            removals=frozenset(removals),
            additions=additions,
            role=role,
            roles=dict(roles or {}),
            metrics=dict(metrics or {}),
            payload=dict(payload or {}),
        )

    @classmethod
    def unchanged(
        cls,
        stage: Any,
        summary: str,
        *,
        status: StageStatus = StageStatus.SUCCESS,
        metrics: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> "StageResult":
        return cls(
            stage_id=stage.id,
            kind=stage.kind,
            status=status,
            summary=summary,
            metrics=dict(metrics or {}),
            payload=dict(payload or {}),
        )
