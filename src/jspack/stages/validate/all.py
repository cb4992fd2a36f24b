# src/jspack/stages/validate/all.py
"""Composição `validate.all`: validate.libs seguido de validate.checksums."""

from __future__ import annotations

from typing import Sequence

from jspack.core.checksums import ValidateChecksumsStage
from jspack.core.engine import Pipeline, compose

from .libs import ValidateLibsStage


def validate(patterns: Sequence[str] = ()) -> Pipeline:
    return compose(ValidateLibsStage(), ValidateChecksumsStage(patterns=tuple(patterns)), id="validate.all")
