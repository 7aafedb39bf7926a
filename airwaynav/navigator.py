"""Command that loads an airway surface and a CT volume and reports on them."""

from __future__ import annotations

import argparse
import logging
import sys

from . import logger
from .airway_tree import AirwayTree
from .ctvolume import CTVolume, image_path_for_header

_log = logging.getLogger(__name__)

DISPLAY_WIDTH = 300


def load_volume(header_path) -> CTVolume | None:
    """Load the CT volume whose header is ``header_path``; ``None`` for an empty path."""
    if not header_path:
        return None
    return CTVolume(str(header_path), image_path_for_header(header_path))


def describe_volume(volume: CTVolume) -> str:
    """Return a summary of a CT volume and the sizes its slice views take."""
    lines = [
        f"Volume: {volume.num_columns} columns x {volume.num_rows} rows x {volume.num_slices} slices",
        f"Voxel size: {volume.x_delta:g} x {volume.y_delta:g} x {volume.z_delta:g}",
        f"Gray range: {volume.gray_min} to {volume.gray_max}",
    ]
    views = [
        ("Axial", volume.axial_aspect_ratio()),
        ("Coronal", volume.coronal_aspect_ratio()),
        ("Sagittal", volume.sagittal_aspect_ratio()),
    ]
    for name, ratio in views:
        lines.append(f"{name} display: {DISPLAY_WIDTH} x {DISPLAY_WIDTH / ratio:.1f}")
    lines.append(f"Oblique display: {DISPLAY_WIDTH} x {DISPLAY_WIDTH}")
    return "\n".join(lines)


def describe_airway(tree: AirwayTree) -> str:
    """Return a summary of an airway surface."""
    x, y, z = (float(v) for v in tree.mean_location())
    return "\n".join(
        [
            f"Airway surface: {len(tree.points)} vertices, {len(tree.polygons)} polygons",
            f"Mean location: ({x:.3f}, {y:.3f}, {z:.3f})",
        ]
    )


def main(argv=None) -> int:
    """Load the given airway surface and CT volume and print what was found."""
    parser = argparse.ArgumentParser(prog="airwaynav", description=main.__doc__)
    parser.add_argument("--surface", help="airway tree surface (.vtk polygon data)")
    parser.add_argument("--image", help="Analyze image header (.hdr)")
    parser.add_argument("--log", default="Application.log", help="log file path")
    args = parser.parse_args(argv)
    if not args.surface and not args.image:
        parser.error("give --surface, --image or both")

    logger.initialize(args.log)
    try:
        if args.surface:
            tree = AirwayTree.from_file(args.surface)
            print(describe_airway(tree))
        if args.image:
            volume = load_volume(args.image)
            print(describe_volume(volume))
    except (OSError, ValueError) as exc:
        _log.error("Cannot load: %s", exc)
        print(f"airwaynav: {exc}", file=sys.stderr)
        return 1
    finally:
        logger.clean()
    return 0