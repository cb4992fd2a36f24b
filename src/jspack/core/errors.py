"""
jspack — Canonical Error Structures (v1)

Este módulo define o payload canônico de erro do jspack.
Erros são artefatos de domínio e fazem parte do contrato operacional,
devendo ser explícitos, serializáveis e acionáveis.

O payload é o que o Engine registra no Manifest de execução quando um
Stage falha; a exceção tipada correspondente vive em `core.exceptions`.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class JspackErrorPayload:
    """
    Payload canônico de erro do jspack.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    - decision_required: indica que a run foi bloqueada aguardando decisão humana
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

NOT_FOUND = "NOT_FOUND"
CONFLICT = "CONFLICT"
EXECUTION_ERROR = "EXECUTION_ERROR"
CHECKSUM_MISMATCH = "CHECKSUM_MISMATCH"
VALIDATION_ERROR = "VALIDATION_ERROR"

# Engine
STAGE_FAILED = "STAGE_FAILED"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def not_found(
    *,
    resource: str,
    stage: Optional[str] = None,
    hint: str = "Verifique se o recurso existe nas dependências declaradas ou no fileset antes deste Stage.",
) -> JspackErrorPayload:
    return JspackErrorPayload(
        type=NOT_FOUND,
        message=f"Recurso não encontrado: {resource}",
        details={"resource": resource, "stage": stage},
        hint=hint,
    )


def conflict(
    *,
    paths: List[str],
    stage: Optional[str] = None,
    hint: str = "Remova o path do Snapshot no mesmo commit ou escreva o arquivo em outro destino.",
) -> JspackErrorPayload:
    return JspackErrorPayload(
        type=CONFLICT,
        message="Commit introduziria paths duplicados",
        details={"paths": list(paths), "stage": stage},
        hint=hint,
    )


def checksum_mismatch(
    *,
    changed: List[str],
    added: List[str],
    removed: List[str],
    manifest_file: str,
    hint: str = "Revise o diff do arquivo de checksums e confirme a atualização interativamente.",
) -> JspackErrorPayload:
    return JspackErrorPayload(
        type=CHECKSUM_MISMATCH,
        message="Checksums do fileset divergem do manifest persistido",
        details={
            "changed": list(changed),
            "added": list(added),
            "removed": list(removed),
            "manifest_file": manifest_file,
        },
        hint=hint,
        decision_required=True,
    )


def engine_execution_error(
    *,
    stage: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o stacktrace e os eventos da run para diagnosticar a falha. Nenhum fallback é aplicado automaticamente.",
) -> JspackErrorPayload:
    return JspackErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message="Falha inesperada durante a execução do pipeline",
        details={
            "stage": stage,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def engine_configuration_error(
    *,
    message: str = "Configuração inválida para execução do pipeline",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise a configuração da run e dos stages antes de reexecutar.",
) -> JspackErrorPayload:
    return JspackErrorPayload(
        type=ENGINE_CONFIGURATION_ERROR,
        message=message,
        details=details or {},
        hint=hint,
    )


def execution_error(
    *,
    op: str,
    reason: str,
    dependencies: Optional[List[str]] = None,
    stderr: Optional[str] = None,
    hint: str = "Verifique as dependências extras do contexto isolado e a saída de erro do subprocesso.",
) -> JspackErrorPayload:
    return JspackErrorPayload(
        type=EXECUTION_ERROR,
        message=f"Falha ao executar {op} em contexto isolado: {reason}",
        details={
            "op": op,
            "reason": reason,
            "dependencies": list(dependencies or []),
            "stderr": stderr,
        },
        hint=hint,
    )


def validation_error(
    *,
    reason: str,
    stage: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Ajuste as opções do Stage ou os arquivos do fileset antes de reexecutar.",
) -> JspackErrorPayload:
    merged: Dict[str, Any] = {"stage": stage}
    merged.update(details or {})
    return JspackErrorPayload(
        type=VALIDATION_ERROR,
        message=reason,
        details=merged,
        hint=hint,
    )
