# src/jspack/core/isolation/worker.py
"""
Entry point executado dentro de um contexto isolado.

Lê uma requisição JSON do stdin, resolve `"modulo:funcao"`, executa a
operação e escreve uma única linha JSON de resposta no stdout. Qualquer
saída da própria operação em stdout é redirecionada para stderr para não
corromper o protocolo.
"""

from __future__ import annotations

import importlib
import json
import sys
from contextlib import redirect_stdout
from typing import Any, Callable, Dict, TextIO


def resolve_operation(op: str) -> Callable[..., Any]:
    module_name, sep, func_name = op.partition(":")
    if not sep or not module_name or not func_name:
        raise ValueError(f"Operação inválida (esperado 'modulo:funcao'): {op!r}")
    module = importlib.import_module(module_name)
    fn = getattr(module, func_name, None)
    if not callable(fn):
        raise AttributeError(f"{module_name} não define a função {func_name}")
    return fn


def handle(request: Dict[str, Any]) -> Dict[str, Any]:
    try:
        fn = resolve_operation(request["op"])
        with redirect_stdout(sys.stderr):
            result = fn(*request.get("args", []), **request.get("kwargs", {}))
        json.dumps(result)
    except Exception as exc:  # noqa: BLE001 - marshalled back to the caller
        return {"ok": False, "error": {"type": exc.__class__.__name__, "message": str(exc)}}
    return {"ok": True, "result": result}


def main(stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> int:
    try:
        request = json.loads(stdin.read())
    except json.JSONDecodeError as exc:
        response = {"ok": False, "error": {"type": "JSONDecodeError", "message": str(exc)}}
    else:
        response = handle(request)
    stdout.write(json.dumps(response) + "\n")
    stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
