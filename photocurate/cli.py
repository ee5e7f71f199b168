"""Command-line interface for photocurate."""

import itertools
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
from dotenv import load_dotenv

from photocurate import __version__
from photocurate.classifier import PhotoClassifier
from photocurate.errors import ClassificationFault, PreconditionViolation, Verdict
from photocurate.histogram.calc import histogram_from_file, load_baseline_histograms, save_histogram
from photocurate.histogram.compare import BoardType, CompareMetric, analyze_memo
from photocurate.luminance.darkness import analyze_darkness
from photocurate.media.display import StaticDisplayGeometry, display_from_env
from photocurate.preprocessing.loader import is_image_path, load_image
from photocurate.sharpness.blur import analyze_blur, edge_response, prepare_for_blur, to_greyscale
from photocurate.utils.debug import save_debug_image

# Load environment variables from .env
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)

logger = logging.getLogger(__name__)


def _format(verdict: Verdict, label: str) -> str:
    if not verdict.evaluated:
        return click.style(f"not evaluated ({verdict.fault})", fg="red")
    if verdict.detected:
        return click.style(label.upper(), fg="yellow", bold=True)
    return f"not {label}"


def _echo(path: str, verdict: Verdict, label: str) -> None:
    click.echo(f"{path}: {_format(verdict, label)}")


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """photocurate - classify photos as dark, blurry, similar, memo boards and more."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    ctx.obj = PhotoClassifier()


@main.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path())
@click.pass_obj
def dark(classifier: PhotoClassifier, paths: tuple) -> None:
    """Report which images are too dark."""
    for path in paths:
        _echo(path, classifier.check_dark(path), "dark")


@main.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path())
@click.option(
    '--debug',
    'debug_dir',
    type=click.Path(file_okay=False),
    help='Save the analysed crop and its edge response to this directory'
)
@click.pass_obj
def blur(classifier: PhotoClassifier, paths: tuple, debug_dir: Optional[str]) -> None:
    """Report which images are out of focus."""
    for path in paths:
        _echo(path, classifier.check_blur(path), "blurry")

        if debug_dir:
            try:
                cropped = prepare_for_blur(load_image(path), classifier.thresholds)
                stem = Path(path).stem
                save_debug_image(cropped, Path(debug_dir) / f"{stem}_01_crop.jpg", "Blur crop")
                save_debug_image(
                    edge_response(to_greyscale(cropped)),
                    Path(debug_dir) / f"{stem}_02_laplacian.jpg",
                    "Edge response",
                )
            except ClassificationFault as e:
                logger.warning(f"Could not write debug images for {path}: {e}")


@main.command()
@click.argument('source', type=click.Path())
@click.argument('comparing', type=click.Path())
@click.pass_obj
def similar(classifier: PhotoClassifier, source: str, comparing: str) -> None:
    """Report whether two images are near duplicates."""
    _echo(f"{source} vs {comparing}", classifier.check_similar(source, comparing), "similar")


@main.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path())
@click.option(
    '--baseline',
    '-b',
    'baseline_paths',
    multiple=True,
    required=True,
    type=click.Path(exists=True),
    help='Reference memo-board photo or .npy histogram (repeatable)'
)
@click.option(
    '--metric',
    type=click.Choice([m.value for m in CompareMetric]),
    default=CompareMetric.CORRELATION.value,
    show_default=True,
    help='Histogram comparison metric'
)
@click.option(
    '--board',
    type=click.Choice([b.value for b in BoardType]),
    default=BoardType.WHITE.value,
    show_default=True,
    help='Board background colour'
)
@click.pass_obj
def memo(
    classifier: PhotoClassifier,
    paths: tuple,
    baseline_paths: tuple,
    metric: str,
    board: str
) -> None:
    """Report which images are photographed memo boards."""
    try:
        baselines = load_baseline_histograms(baseline_paths)
    except ClassificationFault as e:
        logger.error(f"Cannot load baselines: {e}")
        sys.exit(1)

    for path in paths:
        _echo(path, classifier.check_memo(path, metric, board, baselines), "memo")


@main.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path())
@click.pass_obj
def decorated(classifier: PhotoClassifier, paths: tuple) -> None:
    """Report which images were saved by a photo-editing app."""
    for path in paths:
        _echo(path, Verdict(classifier.is_decorated(path)), "decorated")


@main.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path())
@click.option('--width', type=int, help='Display width (default: PHOTOCURATE_DISPLAY_WIDTH)')
@click.option('--height', type=int, help='Display height (default: PHOTOCURATE_DISPLAY_HEIGHT)')
@click.pass_obj
def screenshot(
    classifier: PhotoClassifier,
    paths: tuple,
    width: Optional[int],
    height: Optional[int]
) -> None:
    """Report which images are screen captures of the configured display."""
    if width and height:
        display = StaticDisplayGeometry(width, height)
    else:
        display = display_from_env()

    if display is None:
        logger.error("Display size unknown: pass --width/--height or set PHOTOCURATE_DISPLAY_WIDTH/HEIGHT")
        sys.exit(1)

    for path in paths:
        _echo(path, classifier.check_screenshot(path, display), "screenshot")


@main.command()
@click.argument('paths', nargs=-1, required=True, type=click.Path())
@click.pass_obj
def video(classifier: PhotoClassifier, paths: tuple) -> None:
    """Report which videos are one-second clips."""
    for path in paths:
        _echo(path, classifier.check_short_video(path), "short video")


@main.command()
@click.argument('image', type=click.Path(exists=True))
@click.argument('output', type=click.Path())
def baseline(image: str, output: str) -> None:
    """Save the colour histogram of a reference memo photo as .npy."""
    try:
        hist = histogram_from_file(image)
    except ClassificationFault as e:
        logger.error(f"Cannot build histogram: {e}")
        sys.exit(1)

    save_histogram(hist, output)
    logger.info(f"Saved baseline histogram: {output}")


@main.command()
@click.argument('path', type=click.Path(exists=True))
@click.option('--baseline', '-b', 'baseline_paths', multiple=True, type=click.Path(exists=True))
@click.pass_obj
def inspect(classifier: PhotoClassifier, path: str, baseline_paths: tuple) -> None:
    """Print the raw statistics behind each verdict for one image."""
    try:
        image = load_image(path)
    except ClassificationFault as e:
        logger.error(str(e))
        sys.exit(1)

    thresholds = classifier.thresholds
    darkness = analyze_darkness(image, thresholds)
    sharpness = analyze_blur(image, thresholds)

    click.echo(f"{path} ({image.shape[1]}x{image.shape[0]})")
    click.echo(
        f"  Dark fraction: {darkness.dark_fraction:.3f} "
        f"(limit {thresholds.dark_fraction}) -> dark={darkness.is_dark}"
    )
    click.echo(
        f"  Max edge response: {sharpness.max_response} "
        f"(limit {thresholds.blur_threshold}) -> blurry={sharpness.is_blurry}"
    )
    click.echo(f"  Decorated: {classifier.is_decorated(path)}")

    if baseline_paths:
        try:
            baselines = load_baseline_histograms(baseline_paths)
        except ClassificationFault as e:
            logger.error(f"Cannot load baselines: {e}")
            sys.exit(1)

        for metric in CompareMetric:
            for board in BoardType:
                result = analyze_memo(image, metric, board, baselines, thresholds)
                click.echo(
                    f"  Memo {metric.value}/{board.value}: {result.average_score:.4f} "
                    f"(threshold {result.threshold}) -> memo={result.is_memo}"
                )


@main.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
@click.option('--similar/--no-similar', default=True, help='Also compare every pair of images')
@click.pass_obj
def scan(classifier: PhotoClassifier, directory: str, similar: bool) -> None:
    """Classify every JPEG/PNG image in a directory."""
    files: List[Path] = sorted(p for p in Path(directory).iterdir() if p.is_file() and is_image_path(p))

    if not files:
        logger.error(f"No images found in {directory}")
        sys.exit(1)

    logger.info(f"Scanning {len(files)} image(s)")

    usable = []
    for path in files:
        dark_verdict = classifier.check_dark(path)
        flags = []
        if dark_verdict.detected:
            flags.append("dark")
        elif dark_verdict.evaluated:
            usable.append(path)
            if classifier.is_blur(path):
                flags.append("blurry")
        else:
            flags.append("unreadable")
        if classifier.is_decorated(path):
            flags.append("decorated")

        click.echo(f"{path.name}: {', '.join(flags) if flags else 'ok'}")

    if similar:
        pairs = 0
        for source, comparing in itertools.combinations(usable, 2):
            if classifier.is_similar(source, comparing):
                pairs += 1
                click.echo(f"similar: {source.name} ~ {comparing.name}")
        logger.info(f"Found {pairs} similar pair(s)")


def run() -> None:
    try:
        main()
    except PreconditionViolation as e:
        logger.error(str(e))
        sys.exit(2)


if __name__ == '__main__':
    run()
