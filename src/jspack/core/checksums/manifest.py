# src/jspack/core/checksums/manifest.py
"""
Manifest de checksums — arquivo versionado na raiz do repositório.

Formato:
    JSON com um objeto `{path: digest}` em ordem de path, indentado, um
    path por linha, para que o diff no controle de versão mostre
    exatamente quais arquivos mudaram.

Decisões arquiteturais:
    - Arquivo ausente significa "sem baseline" (`None`), o que é diferente
      de um manifest vazio (`{}`)
    - A comparação devolve um `ChecksumDiff` explícito em vez de booleano,
      para que o erro de divergência nomeie os paths afetados

Limites explícitos:
    - Nenhum lock é aplicado; apenas uma run por raiz de repositório
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from jspack.core import errors
from jspack.core.exceptions import ValidationError


def render_checksums(entries: Optional[Mapping[str, str]]) -> str:
    ordered = {k: entries[k] for k in sorted(entries)} if entries is not None else None
    return json.dumps(ordered, indent=2, ensure_ascii=False) + "\n"


def read_checksums(path: Path) -> Optional[Dict[str, str]]:
    path = Path(path)
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
    except json.JSONDecodeError as exc:
        raise ValidationError.from_payload(
            errors.validation_error(
                reason=f"Manifest de checksums ilegível: {path.name}",
                details={"manifest_file": str(path), "error": str(exc)},
                hint="Corrija ou remova o arquivo de checksums e reexecute.",
            )
        ) from exc

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ValidationError.from_payload(
            errors.validation_error(
                reason=f"Manifest de checksums deve mapear path -> digest: {path.name}",
                details={"manifest_file": str(path)},
            )
        )
    return {k: data[k] for k in sorted(data)}


def write_checksums(path: Path, entries: Mapping[str, str]) -> None:
    Path(path).write_text(render_checksums(entries), encoding="utf-8")


@dataclass(frozen=True)
class ChecksumDiff:
    changed: List[str]
    added: List[str]
    removed: List[str]

    @property
    def empty(self) -> bool:
        return not (self.changed or self.added or self.removed)


def diff_checksums(prior: Mapping[str, str], fresh: Mapping[str, str]) -> ChecksumDiff:
    return ChecksumDiff(
        changed=sorted(p for p in fresh if p in prior and prior[p] != fresh[p]),
        added=sorted(p for p in fresh if p not in prior),
        removed=sorted(p for p in prior if p not in fresh),
    )
