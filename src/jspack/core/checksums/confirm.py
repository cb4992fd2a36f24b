# src/jspack/core/checksums/confirm.py
"""
Fontes de confirmação para divergência de checksums.

    - AutoReject           → sempre nega (ambientes de CI)
    - InteractiveConsole   → pergunta no console; sem terminal ou EOF = não
    - ScriptedConfirmation → respostas pré-definidas (embedding e testes)

Apenas a resposta exata `y` conta como afirmativa.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, TextIO, runtime_checkable

PROMPT = "Checksums have changed, update? [yn] "

AFFIRMATIVE = "y"


@runtime_checkable
class ConfirmationSource(Protocol):
    def confirm(self, prompt: str) -> bool:
        ...


class AutoReject:
    def confirm(self, prompt: str) -> bool:
        return False


@dataclass
class InteractiveConsole:
    """Lê uma linha do console. `require_tty=False` aceita stdin redirecionado."""

    stdin: Optional[TextIO] = None
    out: Optional[TextIO] = None
    require_tty: bool = True

    def confirm(self, prompt: str) -> bool:
        stdin = self.stdin if self.stdin is not None else sys.stdin
        out = self.out if self.out is not None else sys.stderr
        if stdin is None or stdin.closed:
            return False
        if self.require_tty:
            isatty = getattr(stdin, "isatty", None)
            if not callable(isatty) or not isatty():
                return False

        out.write(prompt)
        out.flush()
        line = stdin.readline()
        if not line:
            return False
        return line.strip() == AFFIRMATIVE


@dataclass
class ScriptedConfirmation:
    """Devolve respostas em ordem; esgotadas, nega."""

    answers: Sequence[str] = ()
    prompts: List[str] = field(default_factory=list)

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if len(self.prompts) > len(self.answers):
            return False
        return str(self.answers[len(self.prompts) - 1]).strip() == AFFIRMATIVE
