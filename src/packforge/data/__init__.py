"""Data layer utilities for loading and validating JSON definitions."""

from .cache import DocumentCache
from .errors import DataError, DataLoadError, DataReferenceError, DataValidationError
from .fetchers import DocumentFetcher, FileFetcher, MappingFetcher, UrlFetcher
from .loader import DataSources, GameDataLoader, check_references, load_game_data
from .paths import get_definitions_path, get_repo_root

__all__ = [
    "DataError",
    "DataLoadError",
    "DataReferenceError",
    "DataSources",
    "DataValidationError",
    "DocumentCache",
    "DocumentFetcher",
    "FileFetcher",
    "GameDataLoader",
    "MappingFetcher",
    "UrlFetcher",
    "check_references",
    "get_definitions_path",
    "get_repo_root",
    "load_game_data",
]
