"""Retrieval and validation of NBM 1D archive text files."""

from src.archive.archive_client import ArchiveClient, build_download_url
from src.archive.config import ArchiveConfig, default_cache_path
from src.archive.init_time import calculate_initialization_time
from src.archive.local_store import LocalStore
from src.archive.nbm_data import NBMData
from src.archive.nbm_store import NBMStore
from src.archive.site_resolver import SiteInfo, SiteValidation, resolve_site

__all__ = [
    "ArchiveClient",
    "ArchiveConfig",
    "LocalStore",
    "NBMData",
    "NBMStore",
    "SiteInfo",
    "SiteValidation",
    "build_download_url",
    "calculate_initialization_time",
    "default_cache_path",
    "resolve_site",
]
