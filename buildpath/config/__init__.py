"""
Config Module

Project list and project config loading, plus analysis settings.
"""

from .loader import (
    ProjectConfig,
    ProjectLoader,
    ProjectReference,
    load_project_config,
    read_project_list,
    resolve_reference,
)
from .settings import AnalysisConfig

__all__ = [
    "AnalysisConfig",
    "ProjectConfig",
    "ProjectLoader",
    "ProjectReference",
    "load_project_config",
    "read_project_list",
    "resolve_reference",
]
