"""
Analysis Settings

Options controlling a single analysis run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class AnalysisConfig:
    """Configuration for one build path analysis"""
    projects_file: Path
    base_dir: Path = Path(".")
    top_n: Optional[int] = 10  # None reports every project
    root: Optional[str] = None  # Restrict to this project and its dependents
    graphviz: Optional[Path] = None  # Write a dot dump of the analysed graph

    def __post_init__(self):
        self.projects_file = Path(self.projects_file)
        self.base_dir = Path(self.base_dir)
        if self.graphviz is not None:
            self.graphviz = Path(self.graphviz)
        if self.top_n is not None and self.top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {self.top_n}")
