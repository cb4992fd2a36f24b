# src/jspack/core/config/hashing.py
"""
Hashing canônico de configuração e fingerprints de valores.

O hash gerado representa a identidade estrutural de um valor e é usado para:
    - rastreabilidade de execuções (hash da configuração no Manifest de run)
    - chaves de cache de contextos isolados (conjunto de dependências)
    - memoização de Stages (ex.: conjunto de arquivos de dependência)

Política de hashing (v1):
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Conjuntos são convertidos em listas ordenadas antes da serialização
    - Codificação UTF-8
    - SHA-256

Invariantes:
    - Valores estruturalmente equivalentes produzem o mesmo hash
    - O valor gerado é sempre uma string hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict


def _canonical(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted((_canonical(v) for v in value), key=lambda v: json.dumps(v, sort_keys=True))
    if isinstance(value, dict):
        return {str(k): _canonical(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def _sha256_of(value: Any) -> str:
    canonical_json = json.dumps(
        _canonical(value),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico da configuração efetiva.

    Args:
        config (Dict[str, Any]): Configuração efetiva da run.

    Returns:
        str: Hash SHA-256 hexadecimal da configuração.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return _sha256_of(config)


def compute_fingerprint(value: Any) -> str:
    """
    Gera o fingerprint comparável por valor de qualquer estrutura JSON-serializável.

    Conjuntos são ordenados antes da serialização, de modo que
    `{"a", "b"}` e `{"b", "a"}` produzem o mesmo fingerprint.
    Valores não serializáveis em JSON levantam `TypeError`.
    """
    return _sha256_of(value)
