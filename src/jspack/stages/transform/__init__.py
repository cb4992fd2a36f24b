from .concat_preamble import ConcatPreambleStage, concat_preamble
from .minify import MINIFY_DEPENDENCIES, CssAsset, JsAsset, MinifyStage, Unsupported, classify_asset, minify
from .replace_content import ReplaceContentStage, replace_content

__all__ = [
    "ConcatPreambleStage",
    "CssAsset",
    "JsAsset",
    "MINIFY_DEPENDENCIES",
    "MinifyStage",
    "ReplaceContentStage",
    "Unsupported",
    "classify_asset",
    "concat_preamble",
    "minify",
    "replace_content",
]
