"""
Command-Line Interface
======================

Single responsibility: Provide user-friendly CLI for feature-line morphing.
"""

import sys
from pathlib import Path

import click
import torch

from line_morph import __version__
from line_morph.core.exceptions import LineMorphError
from line_morph.pipeline import MorphConfig, run_morphing_pipeline
from line_morph.utils.logging import get_logger, setup_logger

logger = get_logger(__name__)


class LinePairType(click.ParamType):
    """Parses "x1,y1,x2,y2:x1,y1,x2,y2" (source line : destination line)."""

    name = "line-pair"

    def convert(self, value, param, ctx):
        if isinstance(value, tuple):
            return value

        try:
            source_text, dest_text = value.split(':')
            coords = [float(c) for c in source_text.split(',')] + [float(c) for c in dest_text.split(',')]
        except ValueError:
            self.fail(f"{value!r} is not of the form x1,y1,x2,y2:x1,y1,x2,y2", param, ctx)

        if len(coords) != 8:
            self.fail(f"{value!r} needs 4 numbers on each side of ':'", param, ctx)

        return (
            (coords[0], coords[1]),
            (coords[2], coords[3]),
            (coords[4], coords[5]),
            (coords[6], coords[7]),
        )


LINE_PAIR = LinePairType()


@click.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('dest', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '-l', '--pair', 'pairs',
    type=LINE_PAIR,
    multiple=True,
    required=True,
    help='Feature line pair "x1,y1,x2,y2:x1,y1,x2,y2" (source:destination). Repeatable.'
)
@click.option(
    '-n', '--frames',
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help='Number of steps; renders frames+1 images from source to destination'
)
@click.option(
    '-r', '--ratio', 'ratios',
    type=float,
    multiple=True,
    help='Explicit blend ratio in [0, 1]. Repeatable; overrides --frames.'
)
@click.option(
    '-o', '--output',
    type=click.Path(path_type=Path),
    default=None,
    help='Output directory (default: results/)'
)
@click.option('-a', 'weight_a', type=float, default=1.0, show_default=True, help='Weight distance offset')
@click.option('-b', 'weight_b', type=float, default=2.0, show_default=True, help='Weight falloff exponent')
@click.option('-p', 'weight_p', type=float, default=2.0, show_default=True, help='Weight length exponent')
@click.option(
    '--gpu/--cpu',
    default=False,
    help='Use GPU acceleration (default: CPU)'
)
@click.option(
    '-w', '--workers',
    type=click.IntRange(min=1),
    default=None,
    help='Parallel workers (default: CPU cores - 1)'
)
@click.option(
    '--chunk-rows',
    type=click.IntRange(min=1),
    default=None,
    help='Render in bands of this many rows to bound memory'
)
@click.option('--video/--no-video', default=False, help='Encode animation.mp4 with ffmpeg')
@click.option('--fps', type=click.IntRange(min=1), default=10, show_default=True, help='Video frame rate')
@click.option('--heatmap', is_flag=True, help='Save warp displacement heatmaps')
@click.option('--overlay', is_flag=True, help='Save the inputs with feature lines drawn on')
@click.option(
    '-q', '--quiet',
    is_flag=True,
    help='Suppress output'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Logging level (default: INFO)'
)
def morph(source, dest, pairs, frames, ratios, output, weight_a, weight_b, weight_p,
          gpu, workers, chunk_rows, video, fps, heatmap, overlay, quiet, log_level):
    """
    Morph SOURCE into DEST guided by feature line pairs.

    \b
    Examples:
        # One pair, 10 steps (11 frames)
        line-morph morph cat.png dog.png -l 30,40,90,40:28,50,95,45

        # Two pairs, explicit ratios, with video
        line-morph morph a.jpg b.jpg -l 10,10,50,10:12,12,52,14 \\
            -l 20,60,60,60:18,70,64,66 -r 0 -r 0.25 -r 0.5 -r 1 --video
    """
    verbose = not quiet
    setup_logger(name='line_morph', verbose=verbose, log_level=log_level)

    try:
        config = MorphConfig(
            source_image=source,
            dest_image=dest,
            line_pairs=list(pairs),
            output_dir=output or Path('results'),
            frame_count=frames,
            ratios=list(ratios) if ratios else None,
            weight_a=weight_a,
            weight_b=weight_b,
            weight_p=weight_p,
            device=torch.device('cuda' if gpu else 'cpu'),
            verbose=verbose,
            log_level=log_level.upper(),
            create_video=video,
            video_fps=fps,
            export_heatmap=heatmap,
            export_overlays=overlay,
            chunk_rows=chunk_rows,
            **({'num_workers': workers} if workers else {}),
        )
    except LineMorphError as e:
        click.secho(f"\n✗ Configuration error: {e}", fg='red', bold=True)
        sys.exit(1)

    try:
        output_path = run_morphing_pipeline(config)
    except KeyboardInterrupt:
        click.secho("\n✗ Interrupted by user", fg='yellow')
        sys.exit(130)
    except LineMorphError as e:
        click.secho(f"✗ Error: {e}", fg='red', bold=True)
        if log_level.upper() == 'DEBUG':
            logger.exception("Morphing failed")
        sys.exit(1)

    if verbose:
        click.secho(f"✓ Success! Results saved to: {output_path}", fg='green', bold=True)


@click.group()
@click.version_option(version=__version__, prog_name='line-morph')
def cli():
    """
    Line Morph - feature-line image morphing.

    \b
    For more help on a specific command:
        line-morph morph --help
    """
    pass


cli.add_command(morph)


def main():
    """Entry point for console_scripts."""
    cli()


if __name__ == '__main__':
    main()
