"""pixelfind CLI - Main entry point.

Provides commands for searching a template inside an image and for
cropping images.

Exit codes:
    0: Success (template found)
    1: Template not found
    2: Configuration or input error
    3: Runtime error
"""

import sys

import click

from .. import __version__
from ..config import get_settings
from ..exceptions import ConfigurationError, ImageProcessingError
from ..find import MatchOptions, PixelMatcher
from ..logging import PerformanceLogger, get_logger, setup_logging
from ..model.element import ImageBuffer, Region
from .formatters import format_result

# Exit codes
EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3

REGION_HELP = "Region as X Y WIDTH HEIGHT"


def configure_logging(verbose: bool) -> None:
    """Configure logging for CLI runs.

    Args:
        verbose: Enable debug logging
    """
    settings = get_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.effective_log_level,
        log_file=settings.log_file,
        structured=settings.structured_logging,
    )


@click.group()
@click.version_option(version=__version__, prog_name="pixelfind")
@click.pass_context
def main(ctx: click.Context) -> None:
    """pixelfind CLI - per-pixel template matching.

    Find template images inside screenshots and crop images.
    """
    ctx.ensure_object(dict)


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.argument("template", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--threshold",
    "-t",
    type=float,
    default=None,
    help="Per-channel similarity threshold (0.1-1.0, default from settings)",
)
@click.option("--region", "-r", type=int, nargs=4, default=None, help=REGION_HELP)
@click.option(
    "--include-last-position",
    is_flag=True,
    help="Also scan the last row and column where the template fits",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def find(
    source: str,
    template: str,
    threshold: float | None,
    region: tuple[int, int, int, int] | None,
    include_last_position: bool,
    output_format: str,
    verbose: bool,
) -> None:
    """Find TEMPLATE inside SOURCE.

    SOURCE: Image to search in (eg. a screenshot)
    TEMPLATE: Image to search for; transparent pixels are ignored
    """
    try:
        configure_logging(verbose)
        options = MatchOptions.from_settings()
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if threshold is not None:
        options = options.with_threshold(threshold)
    if include_last_position:
        options = MatchOptions(options.threshold, include_last_position=True)

    try:
        source_image = ImageBuffer.from_file(source)
        template_image = ImageBuffer.from_file(template)
    except ImageProcessingError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    search_region = Region(*region) if region else None
    performance_logger = PerformanceLogger(get_logger(__name__))

    try:
        result = PixelMatcher(options, performance_logger).find(
            source_image, template_image, search_region
        )
    except Exception as e:
        click.echo(f"Runtime error: {e}", err=True)
        sys.exit(EXIT_RUNTIME_ERROR)

    details = {
        "source": source,
        "template": template,
        "threshold": options.effective_threshold,
        "search_region": list(region) if region else None,
    }
    if verbose:
        details["timing"] = performance_logger.get_stats("find_template")

    click.echo(format_result(result, details, output_format))
    sys.exit(EXIT_SUCCESS if result is not None else EXIT_NOT_FOUND)


@main.command()
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--region", "-r", type=int, nargs=4, required=True, help=REGION_HELP)
def crop(image: str, output: str, region: tuple[int, int, int, int]) -> None:
    """Crop IMAGE to a region and write it to OUTPUT.

    IMAGE: Image to crop
    OUTPUT: Path of the cropped image (format from the extension)
    """
    try:
        cropped = ImageBuffer.from_file(image).crop(Region(*region))
        if cropped.is_empty():
            click.echo(f"Error: region {list(region)} does not overlap {image}", err=True)
            sys.exit(EXIT_CONFIG_ERROR)
        cropped.save(output)
    except ImageProcessingError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(f"Saved {cropped.width}x{cropped.height} crop to {output}")
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
