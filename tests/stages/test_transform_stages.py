# tests/stages/test_transform_stages.py
"""
Testes dos Stages de transformação (minify, replace_content, concat_preamble).

Invariantes:
    - A entrada é escolhida por regex (primeiro em ordem de path)
    - Um output que já existe no fileset é substituído no mesmo commit
    - Arquivos sem minificador são erro de validação
"""

import pytest

from jspack.core.engine import run
from jspack.core.exceptions import NotFoundError, ValidationError
from jspack.core.fileset import Role
from jspack.resolve import ArchiveResolver
from jspack.stages import concat_preamble, minify, replace_content
from jspack.stages.transform import MINIFY_DEPENDENCIES, CssAsset, JsAsset, Unsupported, classify_asset


@pytest.mark.parametrize(
    "path, expected",
    [("a/lib.js", JsAsset), ("a/LIB.CSS", CssAsset), ("a/lib.map", Unsupported)],
)
def test_classify_asset(path, expected):
    assert isinstance(classify_asset(path), expected)


def test_minify_unsupported_input_is_validation_error(ctx, make_snapshot):
    with pytest.raises(ValidationError):
        minify(r"\.map$", "x.min.map").run(ctx, make_snapshot({"lib.map": "{}"}))


def test_minify_missing_input_is_not_found(ctx, make_snapshot):
    with pytest.raises(NotFoundError):
        minify(r"lib\.js$", "lib.min.js").run(ctx, make_snapshot({"other.css": ""}))


def test_minify_js_in_isolated_context(ctx, make_snapshot, builder):
    pytest.importorskip("rjsmin")
    snapshot = make_snapshot({"dist/lib.js": "function f ( a ) {\n  return a ;\n}\n", "lib.min.inc.js": "old"})

    out = run(minify(r"dist/lib\.js$", "lib.min.inc.js"), snapshot, ctx=ctx)

    text = out.get("lib.min.inc.js").read_text()
    assert text != "old"
    assert "\n" not in text.strip()
    assert builder.builds == [MINIFY_DEPENDENCIES]
    assert builder.calls() == ["jspack.remote.minify:minify_js"]


def test_replace_content_writes_output(ctx, make_snapshot):
    snapshot = make_snapshot({"lib.js": "require('react'); require('react');"}, role=Role.SOURCE)

    out = run(replace_content(r"lib\.js$", r"require\('react'\)", "React", output="out/lib.js"), snapshot, ctx=ctx)

    assert out.get("out/lib.js").read_text() == "React; React;"
    assert out.get("out/lib.js").role is Role.SOURCE
    assert out.get("lib.js").read_text() == "require('react'); require('react');"


def test_replace_content_in_place(ctx, make_snapshot):
    out = run(replace_content(r"lib\.js$", "foo", "bar"), make_snapshot({"lib.js": "foo"}), ctx=ctx)
    assert out.paths() == ("lib.js",)
    assert out.get("lib.js").read_text() == "bar"


def test_concat_preamble_joins_inc_files_in_path_order(ctx, make_zip):
    resolver = ArchiveResolver.from_paths(
        [make_zip("deps.jar", {"b/b.inc.js": "B", "a/a.inc.js": "A", "a/a.ext.js": "E"})]
    )

    out = run(concat_preamble(resolver), ctx=ctx)

    assert out.get("preamble.js").read_text() == "A\nB"
    assert any(e["message"] == "Found 2 .inc.js files" for e in ctx.events)
