from .download import DOWNLOAD_DEPENDENCIES, DownloadStage, download

__all__ = ["DOWNLOAD_DEPENDENCIES", "DownloadStage", "download"]
