# tests/remote/test_webjars_and_libs.py
"""Testes das operações remotas sobre jars (mapa de webjars, validação de libs)."""

from jspack.remote.libs import referenced_files, validate_libs
from jspack.remote.webjars import asset_map

DEPS = '{:foreign-libs [{:file "cljsjs/x/development/x.inc.js" :file-min "cljsjs/x/production/x.min.inc.js" :provides ["x"]}] :externs ["cljsjs/x/common/x.ext.js"]}'


def test_asset_map_strips_version_segment(make_zip):
    jar = make_zip(
        "jquery.jar",
        {
            "META-INF/resources/webjars/jquery/3.7.1/jquery.min.js": "jq",
            "META-INF/resources/webjars/jquery/3.7.1/dist/jquery.js": "jq",
            "META-INF/MANIFEST.MF": "m",
        },
    )
    assert asset_map([str(jar)]) == {
        "jquery/dist/jquery.js": "META-INF/resources/webjars/jquery/3.7.1/dist/jquery.js",
        "jquery/jquery.min.js": "META-INF/resources/webjars/jquery/3.7.1/jquery.min.js",
    }


def test_referenced_files_reads_file_keys_and_externs():
    assert referenced_files(DEPS) == [
        "cljsjs/x/common/x.ext.js",
        "cljsjs/x/development/x.inc.js",
        "cljsjs/x/production/x.min.inc.js",
    ]


def test_validate_libs_reports_no_problems_for_complete_jar(make_zip):
    jar = make_zip(
        "x.jar",
        {
            "deps.cljs": DEPS,
            "cljsjs/x/common/x.ext.js": "var x;",
            "cljsjs/x/development/x.inc.js": "x = 1;",
            "cljsjs/x/production/x.min.inc.js": "x=1",
        },
    )
    assert validate_libs([str(jar)]) == {"jars": 1, "checked": 3, "problems": []}


def test_validate_libs_reports_missing_and_empty(make_zip):
    jar = make_zip("x.jar", {"deps.cljs": DEPS, "cljsjs/x/common/x.ext.js": "  "})
    bare = make_zip("bare.jar", {"a.js": "a"})

    problems = validate_libs([str(jar), str(bare)])["problems"]

    assert {"jar": str(jar), "path": "cljsjs/x/common/x.ext.js", "problem": "empty"} in problems
    assert {"jar": str(jar), "path": "cljsjs/x/development/x.inc.js", "problem": "missing"} in problems
    assert {"jar": str(bare), "path": "deps.cljs", "problem": "missing"} in problems
