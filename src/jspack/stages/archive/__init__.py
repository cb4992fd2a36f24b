from .decompress import DecompressStage, decompress
from .unzip import UnzipStage, unzip

__all__ = ["DecompressStage", "UnzipStage", "decompress", "unzip"]
