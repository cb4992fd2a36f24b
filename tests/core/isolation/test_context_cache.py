# tests/core/isolation/test_context_cache.py
"""
Testes do cache de contextos isolados.

Os testes asseguram que:
- conjuntos de dependências iguais (em qualquer ordem, objetos distintos)
  compartilham o mesmo contexto
- o builder é chamado no máximo uma vez por conjunto
- a construção só acontece no primeiro `invoke`
- `close` libera todos os contextos construídos
"""

from jspack.core.isolation import ContextCache, LazyContext


def test_equal_sets_share_one_context(builder):
    cache = ContextCache(builder)

    first = cache.acquire(["rjsmin", "rcssmin"])
    second = cache.acquire(("rcssmin", "rjsmin"))
    third = cache.acquire({"rcssmin", " rjsmin "})

    assert first is second is third
    assert len(cache) == 1

    first.invoke("os.path:basename", "/tmp/a.js")
    third.invoke("os.path:basename", "/tmp/b.js")
    assert builder.builds == [frozenset({"rjsmin", "rcssmin"})]


def test_distinct_sets_build_distinct_contexts(builder):
    cache = ContextCache(builder)
    cache.acquire().invoke("os.path:basename", "x")
    cache.acquire(["requests"]).invoke("os.path:basename", "y")

    assert builder.builds == [frozenset(), frozenset({"requests"})]


def test_build_is_deferred_until_invoke(builder):
    handle = ContextCache(builder).acquire(["requests"])

    assert isinstance(handle, LazyContext)
    assert not handle.built
    assert builder.builds == []

    assert handle.invoke("os.path:basename", "/a/b/c.zip") == "c.zip"
    assert handle.built


def test_close_releases_built_contexts(builder):
    cache = ContextCache(builder)
    cache.acquire(["a"]).invoke("os.path:basename", "x")
    cache.acquire(["b"])

    cache.close()

    assert len(cache) == 0
    assert [c.closed for c in builder.contexts] == [True]


def test_run_context_isolated_uses_cache(ctx, builder):
    assert ctx.isolated(["requests"]) is ctx.isolated({"requests"})
    assert builder.builds == []
