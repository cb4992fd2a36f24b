"""
jspack — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do jspack.

Objetivo:
- Permitir que Stages/Engine levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para JspackErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Toda exceção é fatal para a run corrente (sem retry automático)
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .errors import (
    CHECKSUM_MISMATCH,
    CONFLICT,
    ENGINE_EXECUTION_ERROR,
    EXECUTION_ERROR,
    NOT_FOUND,
    STAGE_FAILED,
    VALIDATION_ERROR,
    JspackErrorPayload,
)


@dataclass(eq=False)
class JspackException(Exception):
    """Base class para exceções internas do jspack.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    code: ClassVar[str] = ENGINE_EXECUTION_ERROR

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None
    decision_required: bool = False

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message

    @classmethod
    def from_payload(cls, payload: JspackErrorPayload, **extra: Any):
        return cls(
            message=payload.message,
            details=dict(payload.details),
            hint=payload.hint,
            decision_required=payload.decision_required,
            **extra,
        )

    def to_payload(self) -> JspackErrorPayload:
        return JspackErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
            decision_required=self.decision_required,
        )


@dataclass(eq=False)
class NotFoundError(JspackException):
    """Recurso nomeado (arquivo, asset de webjar, entrada de dependência) não localizado."""

    code: ClassVar[str] = NOT_FOUND


@dataclass(eq=False)
class ConflictError(JspackException):
    """Commit introduziria um path duplicado no Snapshot."""

    code: ClassVar[str] = CONFLICT


@dataclass(eq=False)
class ExecutionError(JspackException):
    """Falha de invocação dentro de um contexto isolado (subprocesso, colaborador)."""

    code: ClassVar[str] = EXECUTION_ERROR


@dataclass(eq=False)
class ChecksumMismatchError(JspackException):
    """Checksums divergentes sem primeira execução nem confirmação explícita."""

    code: ClassVar[str] = CHECKSUM_MISMATCH


@dataclass(eq=False)
class ValidationError(JspackException):
    """Validação semântica de metadados ou artefatos gerados falhou."""

    code: ClassVar[str] = VALIDATION_ERROR


@dataclass(eq=False)
class StageError(JspackException):
    """Falha de um Stage, encapsulada pelo Engine.

    `stage` identifica o Stage que falhou; `cause` é a exceção original
    (também disponível em `__cause__`) e `snapshot` o último Snapshot
    commitado com sucesso.
    """

    code: ClassVar[str] = STAGE_FAILED

    stage: str = ""
    snapshot: Any = None

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__
