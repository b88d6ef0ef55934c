"""
Morphing Pipeline Orchestrator
===============================

Single responsibility: Coordinate a complete morphing run.

Load both images, reconcile their dimensions, render every frame, and
write PNG frames plus the optional overlays, heatmap and video.
"""

from pathlib import Path

import torch

from line_morph.core.image_io import load_image, match_dimensions, save_image, to_numpy_image
from line_morph.core.morpher import create_morpher
from line_morph.pipeline.config import MorphConfig
from line_morph.pipeline.workers import (
    _save_png_worker,
    create_output_structure,
    generate_frame_filename,
)
from line_morph.utils.logging import get_logger, session_log
from line_morph.utils.parallel import create_worker_pool
from line_morph.visualization.heatmap import compute_displacement_magnitude, create_heatmap_image
from line_morph.visualization.overlay import draw_feature_lines
from line_morph.visualization.video import check_ffmpeg_available, create_video_from_frames

logger = get_logger(__name__)


def run_morphing_pipeline(config: MorphConfig) -> Path:
    """
    Execute a complete morphing run.

    Steps:
    1. Load images and match the destination size to the source
    2. Build the morpher from the configured line pairs
    3. Render all frames in ratio order
    4. Save PNG frames (process pool)
    5. Optional overlays, displacement heatmap and video

    Everything the package logs during the run, warnings included, is
    also written to session.log in the run directory.

    Args:
        config: MorphConfig instance with all run settings

    Returns:
        Path to the run directory containing all results

    Raises:
        ImageLoadError: If an input image cannot be read
        LineMorphError: If morphing fails
    """
    run_dir, png_dir, log_file, video_file = create_output_structure(
        config.output_dir,
        config.source_image.stem,
        config.dest_image.stem,
        config.timestamp
    )

    with session_log(log_file, verbose=config.verbose, log_level=config.log_level):
        _run_stages(config, run_dir, png_dir, video_file)
        logger.info("=" * 70)
        logger.info(f"Output directory: {run_dir}/")
        logger.info(f"Session log: {log_file}")
        logger.info("=" * 70)

    return run_dir


def _run_stages(config: MorphConfig, run_dir: Path, png_dir: Path, video_file: Path) -> None:
    ratios = config.blend_ratios

    logger.info("=" * 70)
    logger.info("FEATURE LINE MORPHING")
    logger.info("=" * 70)
    logger.info(f"  Source: {config.source_image.name}")
    logger.info(f"  Destination: {config.dest_image.name}")
    logger.info(f"  Line pairs: {len(config.line_pairs)}")
    logger.info(f"  Frames: {len(ratios)}")
    logger.info(f"  Device: {config.device}")
    logger.info("")

    # -------------------------------------------------------------------------
    # STEP 1: Load images
    # -------------------------------------------------------------------------

    logger.info("STEP 1: Loading images...")
    source = load_image(config.source_image, config.device)
    dest = load_image(config.dest_image, config.device)
    source, dest = match_dimensions(source, dest)
    logger.info(f"  Raster size: {source.shape[1]}x{source.shape[0]}")
    logger.info("")

    # -------------------------------------------------------------------------
    # STEP 2: Render frames
    # -------------------------------------------------------------------------

    logger.info("STEP 2: Rendering frames...")
    morpher = create_morpher(config.feature_pairs, config.weights, config.device)
    frames = morpher.morph_sequence(
        source,
        dest,
        ratios=ratios,
        num_workers=config.num_workers,
        chunk_rows=config.chunk_rows,
    )
    logger.info(f"  Rendered {len(frames)} frames")
    logger.info("")

    # -------------------------------------------------------------------------
    # STEP 3: Save frames
    # -------------------------------------------------------------------------

    logger.info("STEP 3: Saving PNG frames...")
    tasks = [
        (to_numpy_image(frame), png_dir / generate_frame_filename(idx), generate_frame_filename(idx))
        for idx, frame in enumerate(frames)
    ]

    if config.num_workers > 1 and len(tasks) > 1:
        with create_worker_pool("save", max_workers=config.num_workers) as pool:
            results = pool.map(_save_png_worker, tasks)
    else:
        results = [_save_png_worker(task) for task in tasks]

    failed = [name for name, success in results if not success]
    logger.info(f"  Saved {len(results) - len(failed)}/{len(results)} frames to {png_dir}/")
    if failed:
        logger.warning(f"Failed to save: {', '.join(failed)}")
    logger.info("")

    # -------------------------------------------------------------------------
    # STEP 4: Extras
    # -------------------------------------------------------------------------

    if config.export_overlays:
        pairs = config.feature_pairs
        save_image(draw_feature_lines(source, [pair.source for pair in pairs]), run_dir / 'source_lines.png')
        save_image(draw_feature_lines(dest, [pair.dest for pair in pairs]), run_dir / 'dest_lines.png')
        logger.info("  Feature line overlays: source_lines.png, dest_lines.png")

    if config.export_heatmap:
        source_disp, dest_disp = compute_displacement_magnitude(
            source.shape[0], source.shape[1], config.feature_pairs, 0.5, config.weights, config.device
        )
        saved = create_heatmap_image(
            [
                ("Source displacement", source_disp.cpu().numpy()),
                ("Destination displacement", dest_disp.cpu().numpy()),
            ],
            run_dir / 'displacement.png',
            title="Warp displacement at alpha=0.5",
        )
        if saved:
            logger.info("  Displacement heatmap: displacement.png")
        else:
            logger.warning("Heatmap creation failed")

    if config.create_video and check_ffmpeg_available():
        if create_video_from_frames(png_dir, video_file, fps=config.video_fps):
            logger.info(f"  Video: {video_file.name}")
        else:
            logger.warning("Video creation failed")

    if config.device.type == 'cuda':
        torch.cuda.empty_cache()
