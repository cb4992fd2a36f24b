# src/jspack/core/config/errors.py
"""
Exceções canônicas da camada de configuração do jspack.

As exceções aqui definidas representam violações estruturais explícitas
da configuração, e não erros de execução de Stages.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de domínio ou de Stage
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do jspack.

    Todas as exceções levantadas durante carregamento, validação estrutural
    e resolução de configuração herdam desta classe, permitindo captura
    genérica e distinção clara entre falhas de configuração e de execução.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de configuração explicitamente
    informado como base (defaults) não existe.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"checksums": {"patterns": ["^cljsjs/"]}}
        - override: {"checksums": "off"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
