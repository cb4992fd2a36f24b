# tests/conftest.py
"""
Fixtures compartilhados para testes do jspack.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas
- contexto de execução controlado (RunContext) com workdir em `tmp_path`
- um builder de contextos isolados que executa operações em processo
- helpers para montar Snapshots e Stages dummy

O objetivo destas fixtures é permitir testes do core (fileset, engine,
isolation, checksums) e dos Stages sem depender de:
- rede
- virtualenvs ou pip
- terminal interativo
- variáveis de ambiente do host

Decisões arquiteturais:
    - O builder em processo faz round-trip JSON de argumentos e
      resultados, preservando o contrato "apenas dados simples"
    - A fonte de confirmação é sempre roteirizada (ScriptedConfirmation)
    - O ambiente (`environ`) é um dict explícito, nunca `os.environ`
    - Stages dummy utilizam duck typing em vez de herança

Invariantes:
    - Todo estado em disco vive sob `tmp_path`
    - Nenhuma fixture acessa a rede
    - Todas as fixtures são seguras para execução em paralelo

Limites explícitos:
    - Não substitui testes de integração com subprocesso real
      (ver `tests/core/isolation/test_subprocess_context.py`)
"""

import io
import json
from datetime import datetime, timezone
from pathlib import Path

import pytest


# =====================================================
# Contextos isolados em processo
# =====================================================

class InProcessContext:
    """
    Contexto isolado falso: executa a operação no próprio processo.

    A requisição e a resposta passam por `json.dumps`/`json.loads`, da
    mesma forma que no worker real, e falhas remotas viram
    `ExecutionError`.
    """

    def __init__(self, dependencies):
        self.dependencies = dependencies
        self.calls = []
        self.closed = False

    def invoke(self, op, *args, **kwargs):
        from jspack.core import errors
        from jspack.core.exceptions import ExecutionError
        from jspack.core.isolation.worker import handle

        request = json.loads(json.dumps({"op": op, "args": list(args), "kwargs": kwargs}))
        self.calls.append(op)
        response = json.loads(json.dumps(handle(request)))
        if not response["ok"]:
            error = response["error"]
            raise ExecutionError.from_payload(
                errors.execution_error(
                    op=op,
                    reason=f"{error['type']}: {error['message']}",
                    dependencies=sorted(self.dependencies),
                )
            )
        return response["result"]

    def close(self):
        self.closed = True


class RecordingBuilder:
    """Builder que registra cada construção (a operação cara) e devolve InProcessContext."""

    def __init__(self):
        self.builds = []
        self.contexts = []

    def __call__(self, dependencies):
        self.builds.append(dependencies)
        context = InProcessContext(dependencies)
        self.contexts.append(context)
        return context

    def calls(self):
        return [op for c in self.contexts for op in c.calls]


@pytest.fixture
def builder():
    """
    Fixture que fornece um builder de contextos isolados em processo.

    Decisões arquiteturais:
        - `builds` registra o conjunto de dependências de cada construção,
          permitindo verificar reuso do cache por valor
        - `calls()` lista todas as operações invocadas, em ordem

    Returns:
        RecordingBuilder: builder novo, sem construções registradas.
    """
    return RecordingBuilder()


# =====================================================
# Config + RunContext
# =====================================================

@pytest.fixture
def dummy_config() -> dict:
    """
    Fixture que fornece overrides mínimos de configuração para testes.

    A configuração efetiva é resolvida por `RunContext.create`, que faz o
    deep-merge destes overrides sobre `DEFAULT_CONFIG`.

    Invariantes:
        - `log_level` DEBUG para que todos os ecos apareçam em `ctx.out`
        - Nenhuma variável de CI é considerada verdadeira por padrão

    Returns:
        dict: overrides de configuração.
    """
    return {
        "engine": {"log_level": "DEBUG"},
        "checksums": {"ci_env_vars": ["CI"]},
    }


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Raiz de repositório simulada (onde o manifest de checksums é gravado)."""
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def confirmation():
    """Fonte de confirmação roteirizada; os testes ajustam `answers`."""
    from jspack.core.checksums import ScriptedConfirmation

    return ScriptedConfirmation()


@pytest.fixture
def ctx(tmp_path: Path, dummy_config, project_root, builder, confirmation):
    """
    Fixture que fornece um RunContext determinístico para testes.

    Decisões arquiteturais:
        - `run_id` fixo e workdir sob `tmp_path`
        - `environ` vazio (sem CI) e saída capturada em `StringIO`
        - Contextos isolados executados em processo via `builder`

    Invariantes:
        - O contexto é fechado ao final do teste (contextos isolados
          liberados)
    """
    from jspack.core.pipeline.context import RunContext

    context = RunContext.create(
        dummy_config,
        run_id="run-test-001",
        workdir=tmp_path / "work",
        project_root=project_root,
        environ={},
        confirmation=confirmation,
        out=io.StringIO(),
        context_builder=builder,
        meta={"source": "pytest"},
    )
    context.created_at = datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc)
    yield context
    context.close()


# =====================================================
# Snapshots e Stages dummy
# =====================================================

@pytest.fixture
def make_snapshot(ctx):
    """
    Fixture factory que monta um Snapshot a partir de `{path: conteúdo}`.

    O conteúdo pode ser `str` (gravado em UTF-8) ou `bytes`. O Snapshot é
    produzido por um commit real no `SnapshotStore` da run.
    """
    from jspack.core.fileset import Role, Snapshot

    counter = {"n": 0}

    def _make(files, *, role=Role.RESOURCE, base=None):
        counter["n"] += 1
        owner = type("SnapshotSeed", (), {"id": f"seed.{counter['n']}"})()
        area = ctx.staging_area(owner)
        for path, content in files.items():
            if isinstance(content, bytes):
                area.write_bytes(path, content)
            else:
                area.write_text(path, content)
        return ctx.store.commit(base if base is not None else Snapshot.empty(), (), area, role=role)

    return _make


@pytest.fixture
def DummyStage():
    """
    Fixture factory que fornece um Stage mínimo e duck-typed.

    O Stage retornado grava `writes` na sua StagingArea, remove `removes`
    e registra em `seen` as revisões de Snapshot recebidas. Com `fail`
    levanta a exceção informada.

    Returns:
        type: classe `_DummyStage`.
    """
    from jspack.core.pipeline.types import StageKind, StageResult

    class _DummyStage:
        def __init__(self, stage_id="dummy", writes=None, removes=(), fail=None, kind=StageKind.TRANSFORM):
            self.id = stage_id
            self.kind = kind
            self.writes = dict(writes or {})
            self.removes = tuple(removes)
            self.fail = fail
            self.seen = []

        def run(self, ctx, snapshot):
            self.seen.append(snapshot)
            if self.fail is not None:
                raise self.fail
            if not self.writes and not self.removes:
                return StageResult.unchanged(self, "dummy unchanged")
            area = ctx.staging_area(self)
            area.clear()
            for path, text in self.writes.items():
                area.write_text(path, text)
            return StageResult.commit(
                self,
                "dummy ok",
                additions=area if self.writes else None,
                removals=self.removes,
            )

    return _DummyStage


@pytest.fixture
def make_zip(tmp_path: Path):
    """
    Fixture factory que grava um arquivo zip a partir de `{entrada: conteúdo}`.

    Usada para simular dependências resolvidas (jars) e downloads `.zip`.
    """
    import zipfile

    def _make(name, entries, *, directory=None):
        root = Path(directory) if directory is not None else tmp_path / "archives"
        root.mkdir(parents=True, exist_ok=True)
        path = root / name
        with zipfile.ZipFile(path, "w") as zf:
            for entry, content in entries.items():
                zf.writestr(entry, content.encode("utf-8") if isinstance(content, str) else content)
        return path

    return _make


@pytest.fixture
def http_server(tmp_path: Path):
    """
    Servidor HTTP local (thread) servindo `tmp_path / "www"`.

    Retorna `(diretório, url_base)`; o servidor é desligado ao final do
    teste. Nenhum acesso à rede externa.
    """
    import functools
    import threading
    from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

    class _QuietHandler(SimpleHTTPRequestHandler):
        def log_message(self, format, *args):
            pass

    root = tmp_path / "www"
    root.mkdir()
    server = ThreadingHTTPServer(("127.0.0.1", 0), functools.partial(_QuietHandler, directory=str(root)))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield root, f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()
