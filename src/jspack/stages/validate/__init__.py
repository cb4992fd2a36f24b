from .all import validate
from .libs import ValidateLibsStage, validate_libs
from jspack.core.checksums import ValidateChecksumsStage, validate_checksums

__all__ = ["ValidateChecksumsStage", "ValidateLibsStage", "validate", "validate_checksums", "validate_libs"]
