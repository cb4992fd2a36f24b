# src/jspack/core/pipeline/stage.py
"""
Contrato canônico de Stage do jspack.

Um Stage é a menor unidade executável do pipeline. Do ponto de vista do
chamador ele é uma função pura `Snapshot -> Snapshot`; internamente pode
fazer I/O (rede, subprocesso) e manter memoização local, desde que
chaveada por um fingerprint explícito das suas entradas.

Invariantes:
    - Stages não mutam o Snapshot recebido
    - Stages escrevem apenas na própria StagingArea
    - Stages não conhecem o Engine nem a ordem de execução
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from jspack.core.fileset import Snapshot

from .types import StageKind, StageResult

if TYPE_CHECKING:  # pragma: no cover
    from .context import RunContext


@runtime_checkable
class Stage(Protocol):
    """
    Contrato mínimo de um Stage.

    Atributos obrigatórios:
        - id: identificador estável (ex.: "archive.unzip")
        - kind: classificação semântica (`StageKind`)

    A conformidade é verificada por duck typing (`@runtime_checkable`);
    não há herança obrigatória.
    """

    id: str
    kind: StageKind

    def run(self, ctx: "RunContext", snapshot: Snapshot) -> StageResult:
        """Executa o Stage sobre `snapshot` e devolve a instrução de commit."""
        ...
