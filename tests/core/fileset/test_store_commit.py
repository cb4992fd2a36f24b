# tests/core/fileset/test_store_commit.py
"""
Testes do commit de StagingAreas em novos Snapshots (SnapshotStore).

Os testes asseguram que:
- `commit(S, {}, A)` contém todo path de `A` e todo path de `S`
- paths removidos nunca reaparecem, exceto se readicionados
- adicionar um path existente sem removê-lo gera `ConflictError`
- o Snapshot base permanece válido e inalterado após o commit
- arquivos não afetados não são copiados (mesma origem em disco)
- `roles` define o papel por path, com `role` como padrão

Decisões arquiteturais:
    - Commits usam StagingAreas reais sob `tmp_path`
    - A ordem determinística das consultas é verificada junto do commit
"""

import pytest

from jspack.core.exceptions import ConflictError
from jspack.core.fileset import (
    Role,
    Snapshot,
    files_by_extension,
    files_by_pattern,
    files_not_by_extension,
    output_files,
    source_files,
)


def test_commit_adds_all_staged_files_to_base(ctx, make_snapshot):
    base = make_snapshot({"b.js": "b", "a/x.inc.js": "x"})
    area = ctx.staging_area(object())
    area.write_text("c.css", "c")
    area.write_text("a/y.ext.js", "y")

    out = ctx.store.commit(base, (), area)

    assert set(out.paths()) == set(base.paths()) | {"c.css", "a/y.ext.js"}
    assert out.revision > base.revision


def test_commit_removals_are_not_present_unless_readded(ctx, make_snapshot):
    base = make_snapshot({"lib.zip": b"PK", "keep.js": "k"})
    out = ctx.store.commit(base, {"lib.zip"}, None)

    assert "lib.zip" not in out
    assert "keep.js" in out


def test_commit_conflict_without_removal(ctx, make_snapshot):
    base = make_snapshot({"same.js": "old"})
    area = ctx.staging_area(object())
    area.write_text("same.js", "new")

    with pytest.raises(ConflictError) as exc:
        ctx.store.commit(base, (), area)

    assert exc.value.details["paths"] == ["same.js"]


def test_commit_remove_then_add_replaces_content(ctx, make_snapshot):
    base = make_snapshot({"same.js": "old"})
    area = ctx.staging_area(object())
    area.write_text("same.js", "new")

    out = ctx.store.commit(base, {"same.js"}, area)

    assert out.get("same.js").read_text() == "new"
    # base continua válido e inalterado
    assert base.get("same.js").read_text() == "old"


def test_commit_does_not_copy_untouched_files(ctx, make_snapshot):
    base = make_snapshot({"untouched.js": "u"})
    area = ctx.staging_area(object())
    area.write_text("new.js", "n")

    out = ctx.store.commit(base, (), area)

    assert out.get("untouched.js").source == base.get("untouched.js").source


def test_staging_changes_after_commit_are_not_visible(ctx):
    area = ctx.staging_area(object())
    area.write_text("f.js", "first")
    out = ctx.store.commit(Snapshot.empty(), (), area)

    area.write_text("f.js", "second")

    assert out.get("f.js").read_text() == "first"


def test_commit_tags_additions_with_role(ctx):
    area = ctx.staging_area(object())
    area.write_text("pkg/in.js", "x")

    out = ctx.store.commit(Snapshot.empty(), (), area, role=Role.SOURCE)

    assert [f.path for f in source_files(out)] == ["pkg/in.js"]
    assert output_files(out) == []


def test_commit_per_path_roles_override_default(ctx):
    area = ctx.staging_area(object())
    area.write_text("out/s.js", "s")
    area.write_text("out/r.js", "r")

    out = ctx.store.commit(Snapshot.empty(), (), area, roles={"out/s.js": Role.SOURCE})

    assert [f.path for f in source_files(out)] == ["out/s.js"]
    assert [f.path for f in output_files(out)] == ["out/r.js"]


def test_queries_are_lexicographic(make_snapshot):
    snap = make_snapshot(
        {
            "z/last.inc.js": "z",
            "a/first.inc.js": "a",
            "m/mid.min.inc.js": "m",
            "style.css": "s",
        }
    )

    assert [f.path for f in files_by_extension(snap, [".inc.js"])] == [
        "a/first.inc.js",
        "m/mid.min.inc.js",
        "z/last.inc.js",
    ]
    assert [f.path for f in files_not_by_extension(snap, [".min.inc.js"])] == [
        "a/first.inc.js",
        "style.css",
        "z/last.inc.js",
    ]
    assert [f.path for f in files_by_pattern(snap, [r"\.css$", r"^z/"])] == ["style.css", "z/last.inc.js"]
