# src/jspack/core/isolation/builder.py
"""
Construção de contextos isolados.

`VirtualEnvBuilder` materializa um virtualenv (com visibilidade dos
site-packages do host) e instala nele as dependências extras pedidas.
A construção é cara (rede + pip) e por isso só acontece sob demanda, via
`ContextCache`. Um conjunto vazio de dependências reutiliza o
interpretador do host sem construir nada.
"""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, FrozenSet, Optional, Sequence

from jspack.core import errors
from jspack.core.config.hashing import compute_fingerprint
from jspack.core.exceptions import ExecutionError

from .context import IsolatedContext, SubprocessContext

ContextBuilder = Callable[[FrozenSet[str]], IsolatedContext]


def _venv_python(env_dir: Path) -> Path:
    if os.name == "nt":
        return env_dir / "Scripts" / "python.exe"
    return env_dir / "bin" / "python"


@dataclass
class VirtualEnvBuilder:
    root: Path
    python: Optional[str] = None
    pip_args: Sequence[str] = ()
    timeout: Optional[float] = None

    def _run(self, cmd: Sequence[str], dependencies: FrozenSet[str], op: str) -> None:
        try:
            proc = subprocess.run(list(cmd), capture_output=True, text=True, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise ExecutionError.from_payload(
                errors.execution_error(op=op, reason=str(exc), dependencies=sorted(dependencies))
            ) from exc
        if proc.returncode != 0:
            raise ExecutionError.from_payload(
                errors.execution_error(
                    op=op,
                    reason=f"código de saída {proc.returncode}",
                    dependencies=sorted(dependencies),
                    stderr=(proc.stderr or "")[-2000:],
                )
            )

    def __call__(self, dependencies: FrozenSet[str]) -> IsolatedContext:
        host_python = self.python or sys.executable
        if not dependencies:
            return SubprocessContext(python=host_python, timeout=self.timeout)

        env_dir = Path(self.root) / f"env-{compute_fingerprint(dependencies)[:16]}"
        self._run(
            [host_python, "-m", "venv", "--system-site-packages", "--clear", str(env_dir)],
            dependencies,
            op="venv.create",
        )
        python = _venv_python(env_dir)
        self._run(
            [
                str(python), "-m", "pip", "install",
                "--disable-pip-version-check", "--quiet",
                *self.pip_args,
                *sorted(dependencies),
            ],
            dependencies,
            op="pip.install",
        )
        return SubprocessContext(
            python=str(python),
            dependencies=dependencies,
            timeout=self.timeout,
            root=env_dir,
        )
