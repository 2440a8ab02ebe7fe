"""
Build Path - Main Entry Point

Reports the projects at the end of the deepest chains of project
references. The JSON report goes to stdout, progress logging to stderr.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..config.settings import AnalysisConfig
from ..schemas.report import render_report
from .analyzer import BuildPathAnalyzer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.command()
@click.version_option(version=__version__)
@click.option(
    "--projects", "--tsconfigs", "projects_file",
    required=True,
    envvar="BUILDPATH_PROJECTS",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File listing one project config location per line",
)
@click.option(
    "--base-dir",
    required=True,
    envvar="BUILDPATH_BASE_DIR",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory the listed config locations are relative to",
)
@click.option(
    "--top", "top_n",
    default=10, show_default=True,
    envvar="BUILDPATH_TOP",
    type=click.IntRange(min=1),
    help="Number of projects to report",
)
@click.option(
    "--root",
    envvar="BUILDPATH_ROOT",
    help="Only analyse this project and the projects depending on it",
)
@click.option(
    "--graphviz",
    envvar="BUILDPATH_GRAPHVIZ",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the analysed graph in dot format to this file",
)
@click.option(
    "--log-level",
    default="INFO", show_default=True,
    envvar="BUILDPATH_LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
)
def cli(
    projects_file: Path,
    base_dir: Path,
    top_n: int,
    root: Optional[str],
    graphviz: Optional[Path],
    log_level: str,
):
    """Find the longest chains of project references."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)

    config = AnalysisConfig(
        projects_file=projects_file,
        base_dir=base_dir,
        top_n=top_n,
        root=root,
        graphviz=graphviz,
    )

    try:
        analyzer = BuildPathAnalyzer(config)
        reports = analyzer.run()
    except (ValueError, OSError) as e:
        # CyclicGraphError is a ValueError too; OSError from the graphviz dump
        logger.error(f"Analysis failed: {e}")
        raise click.ClickException(str(e)) from e

    summary = analyzer.summary()
    logger.info(
        f"Analysed {summary['projects']} projects, "
        f"{summary['references']} references, "
        f"longest chain: {summary['longest_path_length']}"
    )

    click.echo(render_report(reports))


if __name__ == "__main__":
    cli()
