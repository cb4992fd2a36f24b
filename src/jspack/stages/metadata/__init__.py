from .deps_cljs import DEPS_FILE, DepsCljsStage, deps_cljs, render_deps_cljs

__all__ = ["DEPS_FILE", "DepsCljsStage", "deps_cljs", "render_deps_cljs"]
