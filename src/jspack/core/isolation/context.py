# src/jspack/core/isolation/context.py
"""
Contextos de execução isolados.

Um contexto isolado executa uma operação remota (`"modulo:funcao"`) em um
processo separado, com seu próprio conjunto de dependências. Não há
memória compartilhada com o chamador: argumentos e resultados trafegam
como JSON (paths como strings, primitivos, mapas planos).

Protocolo de transporte (worker):
    - stdin:  {"op": "...", "args": [...], "kwargs": {...}}
    - stdout: {"ok": true, "result": ...}
              {"ok": false, "error": {"type": "...", "message": "..."}}

Qualquer falha (exit code, saída malformada, exceção remota, deadline)
é convertida em `ExecutionError`.
"""

from __future__ import annotations

import json
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Protocol, runtime_checkable

import jspack
from jspack.core import errors
from jspack.core.exceptions import ExecutionError

WORKER_MODULE = "jspack.core.isolation.worker"

_STDERR_TAIL = 2000


@runtime_checkable
class IsolatedContext(Protocol):
    """Contrato mínimo de um contexto isolado."""

    dependencies: FrozenSet[str]

    def invoke(self, op: str, *args: Any, **kwargs: Any) -> Any:
        """Executa `op` dentro do sandbox e devolve o resultado desserializado."""
        ...


def package_search_path() -> str:
    """Diretório que contém o pacote `jspack` (entra no PYTHONPATH do sandbox)."""
    return str(Path(jspack.__file__).resolve().parent.parent)


@dataclass
class SubprocessContext:
    """
    Contexto isolado baseado em subprocesso Python.

    Cada `invoke` inicia `python -m jspack.core.isolation.worker` com o
    interpretador do contexto (o do host, ou o de um virtualenv com
    dependências extras).

    Campos:
        - python: executável do interpretador do sandbox
        - dependencies: conjunto de dependências extras instaladas
        - timeout: deadline por invocação, em segundos (None = sem deadline)
        - root: diretório do ambiente, removido em `close()` quando presente
    """

    python: str
    dependencies: FrozenSet[str] = frozenset()
    timeout: Optional[float] = None
    root: Optional[Path] = None
    env: Dict[str, str] = field(default_factory=dict)

    def _environment(self) -> Dict[str, str]:
        env = dict(os.environ)
        env.update(self.env)
        search = [package_search_path()]
        if env.get("PYTHONPATH"):
            search.append(env["PYTHONPATH"])
        env["PYTHONPATH"] = os.pathsep.join(search)
        env["PYTHONIOENCODING"] = "utf-8"
        return env

    def _fail(self, op: str, reason: str, stderr: Optional[str] = None) -> ExecutionError:
        tail = stderr[-_STDERR_TAIL:] if stderr else None
        return ExecutionError.from_payload(
            errors.execution_error(
                op=op,
                reason=reason,
                dependencies=sorted(self.dependencies),
                stderr=tail,
            )
        )

    def invoke(self, op: str, *args: Any, **kwargs: Any) -> Any:
        try:
            request = json.dumps({"op": op, "args": list(args), "kwargs": kwargs})
        except TypeError as exc:
            raise self._fail(op, f"argumentos não serializáveis: {exc}") from exc

        try:
            proc = subprocess.run(
                [self.python, "-m", WORKER_MODULE],
                input=request,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
                env=self._environment(),
            )
        except subprocess.TimeoutExpired as exc:
            raise self._fail(op, f"deadline de {self.timeout}s excedido") from exc
        except OSError as exc:
            raise self._fail(op, f"falha ao iniciar interpretador {self.python}: {exc}") from exc

        lines = [ln for ln in (proc.stdout or "").splitlines() if ln.strip()]
        if proc.returncode != 0 or not lines:
            raise self._fail(op, f"worker terminou com código {proc.returncode}", proc.stderr)

        try:
            response = json.loads(lines[-1])
        except json.JSONDecodeError as exc:
            raise self._fail(op, "resposta malformada do worker", proc.stderr) from exc

        if not response.get("ok"):
            error = response.get("error") or {}
            raise self._fail(
                op,
                f"{error.get('type', 'Error')}: {error.get('message', '')}",
                proc.stderr,
            )
        return response.get("result")

    def close(self) -> None:
        if self.root is not None:
            shutil.rmtree(self.root, ignore_errors=True)
