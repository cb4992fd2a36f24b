# src/jspack/core/pipeline/context.py
"""
Contexto de execução compartilhado de uma run do pipeline.

O RunContext é o único meio pelo qual Stages acessam:
    - a configuração efetiva da run
    - suas StagingAreas exclusivas
    - o SnapshotStore da run
    - o cache de contextos isolados
    - o log estruturado e os warnings por Stage
    - o ambiente (variáveis) e a fonte de confirmação interativa

Ciclo de vida:
    `RunContext.create(...)` cria um diretório de trabalho temporário;
    `close()` (ou o uso como context manager) derruba contextos isolados
    e remove o armazenamento temporário.

Invariantes:
    - Cada StagingArea pertence a exatamente um Stage
    - Logs sempre incluem `run_id` e `step_id`
    - Warnings são agrupados por `step_id`
"""

from __future__ import annotations

import os
import re
import shutil
import sys
import tempfile
import uuid
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, TextIO, Tuple

from jspack.core.config.defaults import DEFAULT_CONFIG
from jspack.core.config.merge import deep_merge
from jspack.core.fileset import SnapshotStore, StagingArea
from jspack.core.isolation import ContextBuilder, ContextCache, LazyContext, VirtualEnvBuilder

_LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]+")


@dataclass
class RunContext:
    """
    Contexto de execução de uma run.

    Campos canônicos:
    - run_id: identificador único da execução
    - created_at: timestamp UTC de criação
    - config: configuração efetiva (defaults + overrides)
    - workdir: diretório temporário da run (staging, store, ambientes)
    - project_root: raiz do repositório (onde vive o manifest de checksums)
    - environ: variáveis de ambiente consultadas (detecção de CI)
    - confirmation: fonte de confirmação para divergência de checksums
      (None = decidida pelo ambiente: CI rejeita, console interativo pergunta)
    - out: stream de saída humana (ecos de log, prompts)
    - meta: metadados livres
    """

    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    workdir: Path
    project_root: Path = field(default_factory=Path.cwd)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    confirmation: Any = None
    out: TextIO = field(default_factory=lambda: sys.stderr)
    context_builder: Optional[ContextBuilder] = None
    meta: Dict[str, Any] = field(default_factory=dict)
    owns_workdir: bool = False

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    _staging: Dict[int, Tuple[Any, StagingArea]] = field(default_factory=dict, init=False, repr=False)
    store: SnapshotStore = field(init=False, repr=False)
    contexts: ContextCache = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.workdir = Path(self.workdir)
        self.project_root = Path(self.project_root)
        self.store = SnapshotStore(self.workdir / "store")

        builder = self.context_builder
        if builder is None:
            iso_cfg = self.config.get("isolation", {}) or {}
            builder = VirtualEnvBuilder(
                root=self.workdir / "envs",
                python=iso_cfg.get("python"),
                pip_args=tuple(iso_cfg.get("pip_args") or ()),
                timeout=iso_cfg.get("timeout_seconds"),
            )
        self.contexts = ContextCache(builder)

    @classmethod
    def create(
        cls,
        config: Optional[Dict[str, Any]] = None,
        *,
        run_id: Optional[str] = None,
        workdir: Optional[Path] = None,
        **kwargs: Any,
    ) -> "RunContext":
        """Cria um contexto com configuração resolvida sobre `DEFAULT_CONFIG`."""
        effective = deep_merge(deepcopy(DEFAULT_CONFIG), config or {})
        owns = workdir is None
        root = Path(tempfile.mkdtemp(prefix="jspack-")) if owns else Path(workdir)
        return cls(
            run_id=run_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=effective,
            workdir=root,
            owns_workdir=owns,
            **kwargs,
        )

    # -----------------------------
    # Recursos da run
    # -----------------------------
    def staging_area(self, owner: Any) -> StagingArea:
        """StagingArea exclusiva de `owner`, criada no primeiro pedido."""
        key = id(owner)
        entry = self._staging.get(key)
        if entry is not None and entry[0] is owner:
            return entry[1]

        label = _UNSAFE.sub("_", str(getattr(owner, "id", owner.__class__.__name__)))
        root = self.workdir / "staging" / f"{len(self._staging):03d}-{label}"
        root.mkdir(parents=True, exist_ok=True)
        area = StagingArea(root=root, owner=str(getattr(owner, "id", label)))
        self._staging[key] = (owner, area)
        return area

    def isolated(self, extra_dependencies=()) -> LazyContext:
        return self.contexts.acquire(extra_dependencies)

    def stage_config(self, stage_id: str) -> Dict[str, Any]:
        stages_cfg = (self.config or {}).get("stages", {}) or {}
        cfg = stages_cfg.get(stage_id, {}) or {}
        return cfg if isinstance(cfg, dict) else {}

    def close(self) -> None:
        self.contexts.close()
        if self.owns_workdir:
            shutil.rmtree(self.workdir, ignore_errors=True)

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def _threshold(self) -> int:
        engine_cfg = (self.config or {}).get("engine", {}) or {}
        return _LEVELS.get(str(engine_cfg.get("log_level", "INFO")).lower(), 20)

    def echo(self, text: str) -> None:
        self.out.write(text)
        self.out.flush()

    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

        if _LEVELS.get(level.lower(), 20) >= self._threshold():
            prefix = "" if level.lower() == "info" else f"{level.upper()}: "
            self.echo(f"{prefix}{message}\n")

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)
        self.log(step_id=step_id, level="warning", message=message)
