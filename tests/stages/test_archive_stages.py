# tests/stages/test_archive_stages.py
"""
Testes dos Stages `archive.unzip` e `archive.decompress`.

Invariantes:
    - Os arquivos extraídos entram no fileset e o arquivo de origem sai
      no mesmo commit
    - Diretórios do zip não viram entradas
    - Um path inexistente é NotFoundError; um zip corrompido ou com
      entrada fora da raiz é ValidationError
    - O mesmo path vindo de dois arquivos é ConflictError, sem perda
      silenciosa de conteúdo
"""

import gzip
import io
import tarfile

import pytest

from jspack.core.engine import run
from jspack.core.exceptions import ConflictError, NotFoundError, StageError, ValidationError
from jspack.stages import decompress, unzip


def _zip_bytes(entries):
    import zipfile

    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return buf.getvalue()


def _tgz_bytes(entries):
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tf:
        for name, data in entries.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def test_unzip_replaces_archive_with_contents(ctx, make_snapshot):
    snapshot = make_snapshot(
        {"lib.zip": _zip_bytes({"dist/": "", "dist/lib.js": "js", "README.md": "r"}), "keep.txt": "k"}
    )

    out = run(unzip(["lib.zip"]), snapshot, ctx=ctx)

    assert out.paths() == ("README.md", "dist/lib.js", "keep.txt")
    assert out.get("dist/lib.js").read_text() == "js"
    assert any(e["message"] == "Extracting 2 files" for e in ctx.events)


def test_unzip_missing_path_is_not_found(ctx, make_snapshot):
    with pytest.raises(NotFoundError):
        unzip(["absent.zip"]).run(ctx, make_snapshot({"a.js": "a"}))


def test_unzip_corrupt_archive_is_validation_error(ctx, make_snapshot):
    with pytest.raises(ValidationError):
        unzip(["bad.zip"]).run(ctx, make_snapshot({"bad.zip": b"not a zip"}))


def test_unzip_conflicting_entry_fails_stage(ctx, make_snapshot):
    snapshot = make_snapshot({"lib.zip": _zip_bytes({"a.js": "new"}), "a.js": "old"})
    with pytest.raises(StageError):
        run(unzip(["lib.zip"]), snapshot, ctx=ctx)


def test_decompress_runs_in_isolated_context(ctx, make_snapshot, builder):
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tf:
        data = b"lib"
        info = tarfile.TarInfo("package/lib.js")
        info.size = len(data)
        tf.addfile(info, io.BytesIO(data))

    out = run(decompress(["lib.tgz"]), make_snapshot({"lib.tgz": buf.getvalue()}), ctx=ctx)

    assert out.paths() == ("package/lib.js",)
    assert builder.calls() == ["jspack.remote.decompress:decompress"]
    assert builder.builds == [frozenset()]


def test_decompress_single_gzip_with_explicit_format(ctx, make_snapshot):
    snapshot = make_snapshot({"lib.js.gz": gzip.compress(b"x=1")})
    out = run(decompress(["lib.js.gz"], compression_format="gz"), snapshot, ctx=ctx)
    assert out.get("lib.js").read_bytes() == b"x=1"


def test_unzip_same_entry_in_two_archives_is_conflict(ctx, make_snapshot):
    snapshot = make_snapshot(
        {"one.zip": _zip_bytes({"lib.js": "ONE"}), "two.zip": _zip_bytes({"lib.js": "TWO", "two.js": "2"})}
    )

    with pytest.raises(ConflictError) as exc:
        unzip(["one.zip", "two.zip"]).run(ctx, snapshot)

    assert exc.value.details["paths"] == ["lib.js"]
    assert exc.value.details["stage"] == "archive.unzip"


def test_unzip_distinct_entries_from_two_archives(ctx, make_snapshot):
    snapshot = make_snapshot({"one.zip": _zip_bytes({"a.js": "a"}), "two.zip": _zip_bytes({"b.js": "b"})})

    out = run(unzip(["one.zip", "two.zip"]), snapshot, ctx=ctx)

    assert out.paths() == ("a.js", "b.js")


def test_unzip_entry_outside_root_is_validation_error(ctx, make_snapshot):
    snapshot = make_snapshot({"evil.zip": _zip_bytes({"../x.js": "x"})})

    with pytest.raises(ValidationError) as exc:
        unzip(["evil.zip"]).run(ctx, snapshot)

    assert exc.value.details["path"] == "evil.zip"
    assert exc.value.details["entry"] == "../x.js"


def test_decompress_same_file_in_two_archives_is_conflict(ctx, make_snapshot):
    snapshot = make_snapshot(
        {
            "one.tgz": _tgz_bytes({"package/lib.js": b"one"}),
            "two.tgz": _tgz_bytes({"package/lib.js": b"two"}),
        }
    )

    with pytest.raises(StageError) as exc:
        run(decompress(["one.tgz", "two.tgz"]), snapshot, ctx=ctx)

    assert isinstance(exc.value.__cause__, ConflictError)
    assert exc.value.__cause__.details["paths"] == ["package/lib.js"]
    assert exc.value.snapshot is snapshot
