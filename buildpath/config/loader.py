"""
Project Config Loader

Reads the list of project config locations and the `references` section of
each project config (tsconfig-style JSON with comments, or YAML).
"""

import os
from pathlib import Path
from typing import List, Optional, Union
import logging

import json5
import yaml
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

YAML_SUFFIXES = {".yaml", ".yml"}


class ProjectReference(BaseModel):
    """A single entry of a project's `references` list"""
    path: str


class ProjectConfig(BaseModel):
    """
    The part of a project config this tool cares about.

    `references` is None when the key is absent, which is different from an
    explicit empty list.
    """
    references: Optional[List[ProjectReference]] = None


def read_project_list(path: PathLike) -> List[str]:
    """
    Read a newline-delimited list of project config locations.

    Blank lines and lines starting with '#' are skipped. Entries are
    normalized but otherwise kept relative.

    Raises:
        ValueError: If the file cannot be read
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ValueError(f"Failed to read project list {path}: {e}") from e

    entries = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(os.path.normpath(line))

    logger.debug(f"Read {len(entries)} project entries from {path}")
    return entries


def load_project_config(path: PathLike) -> ProjectConfig:
    """
    Load and validate a single project config.

    `.yaml`/`.yml` files are parsed as YAML, everything else as JSON5, which
    covers the comments and trailing commas of tsconfig files. A leading
    byte-order mark is ignored and an empty document is an empty config.

    Raises:
        ValueError: If the file is missing, unparsable or has the wrong shape
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
        if path.suffix in YAML_SUFFIXES:
            raw = yaml.safe_load(text)
        else:
            raw = json5.loads(text) if text.strip() else None
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(f"expected an object at the top level, got {type(raw).__name__}")
        return ProjectConfig(**raw)
    except (OSError, ValueError, yaml.YAMLError, ValidationError) as e:
        logger.error(f"Failed to load {path}: {e}")
        raise ValueError(f"Failed to load {path}: {e}") from e


def resolve_reference(project_dir: str, ref_path: str) -> str:
    """
    Resolve a reference relative to the directory of the referencing project.

    A reference may name the referenced project's config file instead of its
    directory; it then resolves to that file's directory so both spellings
    identify the same project.
    """
    resolved = os.path.normpath(os.path.join(project_dir, ref_path))
    if resolved.endswith(".json"):
        resolved = os.path.dirname(resolved) or "."
    return resolved


class ProjectLoader:
    """
    Loads project configs relative to a base directory.

    Example usage:
        loader = ProjectLoader(Path("repo"))
        project_files = loader.load_project_list(Path("tsconfigs.txt"))
        config = loader.load(project_files[0])
    """

    def __init__(self, base_dir: PathLike):
        """
        Args:
            base_dir: Directory the config locations in the project list are relative to
        """
        self.base_dir = Path(base_dir)
        logger.info(f"Initialized ProjectLoader with base_dir: {self.base_dir}")

    def load_project_list(self, path: PathLike) -> List[str]:
        return read_project_list(path)

    def load(self, project_file: str) -> ProjectConfig:
        """Load the config at `project_file`, resolved against the base directory."""
        return load_project_config(self.base_dir / project_file)
