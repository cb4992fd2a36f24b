from .checksum import VerifyChecksumStage, checksum

__all__ = ["VerifyChecksumStage", "checksum"]
