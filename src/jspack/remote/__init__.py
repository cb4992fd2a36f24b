# src/jspack/remote/__init__.py
"""
Operações executadas dentro de contextos isolados.

Cada função aqui é referenciada por string (`"jspack.remote.<mod>:<func>"`)
e só é importada pelo worker do contexto isolado; o processo host nunca
precisa das dependências de terceiros destes módulos. Argumentos e
resultados são sempre dados simples (paths como strings, primitivos,
mapas planos).
"""
