"""Data models for the OpenCritic release checker."""

from .config import AppConfig
from .game import CompanyRef, GameRecord, GenreRef, PlatformRef, ReleaseStub
from .report import ReleaseReport

__all__ = [
    "AppConfig",
    "CompanyRef",
    "GameRecord",
    "GenreRef",
    "PlatformRef",
    "ReleaseReport",
    "ReleaseStub",
]
