"""Click command that analyzes a directory of module descriptors."""

import logging
from pathlib import Path
from typing import Optional

import click

from module_deps import __version__
from module_deps.analyzer import DependencyAnalyzer
from module_deps.config import AnalyzerConfig
from module_deps.errors import ModuleDepsError
from module_deps.loader import find_descriptor_files, load_descriptors
from module_deps.report import render_json, render_text

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__)
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--suffix", "-s", default=None, help="Descriptor file suffix (default: .info.yml)")
@click.option("--format", "-f", "output_format", type=click.Choice(["text", "json"]),
              default="text", show_default=True, help="Report format")
@click.option("--workers", "-w", type=click.IntRange(min=1), default=None,
              help="Number of threads loading descriptors")
@click.option("--timeout", "-t", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Give up loading descriptors after this many seconds")
@click.option("--verbose", "-v", is_flag=True, help="Log every dropped dependency")
def main(directory: Path, suffix: Optional[str], output_format: str,
         workers: Optional[int], timeout: Optional[float], verbose: bool):
    """Parse all descriptor files below DIRECTORY and report dependency cycles
    and redundant dependencies."""
    try:
        config = AnalyzerConfig.from_env()
    except ModuleDepsError as e:
        raise click.ClickException(str(e))

    if suffix:
        config.suffix = suffix
    if workers:
        config.load_workers = workers
    if timeout:
        config.load_timeout = timeout

    logging.basicConfig(level=logging.DEBUG if verbose else config.log_level,
                        format="%(levelname)s %(name)s: %(message)s")

    analyzer = DependencyAnalyzer(suffix=config.suffix)
    try:
        paths = find_descriptor_files(directory, config.suffix)
        if output_format == "text":
            click.echo(f"Found {len(paths)} modules")
        descriptors = load_descriptors(paths, max_workers=config.load_workers,
                                       timeout=config.load_timeout)
        result = analyzer.analyze(descriptors)
    except ModuleDepsError as e:
        logger.error(f"Analysis of {directory} failed: {e}")
        raise click.ClickException(str(e))

    # A cycle is a finding, not a failure: exit code stays 0
    if output_format == "json":
        click.echo(render_json(result))
    else:
        click.echo(render_text(result))


if __name__ == "__main__":
    main()
