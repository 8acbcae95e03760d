# -*- coding: utf-8 -*-
"""
Angle Dump - Summarize the viewing-angle grids of a Sentinel-2 granule.

Reads a granule metadata file (MTD_TL.xml) and prints, in canonical band
order, which detectors cover each band, whether the selected grids are
complete, and the mean viewing angles. Lists any diagnostics found while
reading. Optionally displays the zenith and azimuth grids of one band.

Usage:
  python dump_angles.py <MTD_TL.xml>
  python dump_angles.py <MTD_TL.xml> --strict
  python dump_angles.py <MTD_TL.xml> --plot 3
  python dump_angles.py --help

Dependencies
------------
matplotlib (only for --plot)

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# Standard library
import argparse
import sys
from pathlib import Path
from typing import List, Optional

# s2angles
from s2angles.exceptions import DependencyError
from s2angles.IO.eo import parse_angles
from s2angles.IO.models import MetaGrid, ViewingAnglesResult
from s2angles.vocabulary import AngleAxis, ParseMode


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Summarize Sentinel-2 viewing incidence angle grids.",
    )
    parser.add_argument(
        "filepath",
        type=Path,
        help="Path to the granule metadata file (MTD_TL.xml).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first malformed row or mean-angle value.",
    )
    parser.add_argument(
        "--plot",
        type=int,
        default=None,
        metavar="BAND_ID",
        help="Display the zenith and azimuth grids of this band.",
    )
    return parser.parse_args(argv)


def _coverage_line(position: int, band_id: int, zenith: MetaGrid,
                   azimuth: MetaGrid, result: ViewingAnglesResult) -> str:
    detectors = zenith.detectors_for_band(band_id)
    az_detectors = azimuth.detectors_for_band(band_id)
    status = "missing"
    if detectors or az_detectors:
        # Assembly selects the first-registered detector of each axis
        complete = all(
            dets and collection.get_grid(dets[0], band_id).is_complete()
            for collection, dets in ((zenith, detectors),
                                     (azimuth, az_detectors))
        )
        status = "complete" if complete else "incomplete"

    mean = result.mean_angles.get(band_id)
    mean_text = "-"
    if mean is not None:
        mean_text = f"zen={mean.zenith} az={mean.azimuth}"

    return (f"  [{position:2d}] band {band_id:2d}  "
            f"detectors={detectors}  {status:10s}  {mean_text}")


def plot_band(result: ViewingAnglesResult, band_id: int) -> None:
    """Display the first-registered zenith and azimuth grids of a band.

    Raises
    ------
    DependencyError
        If matplotlib is not installed.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise DependencyError(
            "matplotlib is required for --plot"
        ) from e

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    for ax, axis in zip(axes, AngleAxis):
        collection = result[axis]
        detectors = collection.detectors_for_band(band_id)
        if not detectors:
            ax.set_title(f"{axis.value}: no grid for band {band_id}")
            ax.axis("off")
            continue
        grid = collection.get_grid(detectors[0], band_id)
        im = ax.imshow(grid.to_array(), cmap="viridis",
                       interpolation="nearest")
        ax.set_title(f"{axis.value} band {band_id} detector {detectors[0]}")
        ax.set_xlabel("Column (5 km step)")
        ax.set_ylabel("Row (5 km step)")
        fig.colorbar(im, ax=ax, label="Angle (deg)", shrink=0.8)

    plt.tight_layout()
    plt.show()


def dump_angles(filepath: Path, strict: bool = False,
                plot: Optional[int] = None) -> int:
    """Read and summarize one granule's viewing angles.

    Returns
    -------
    int
        Process exit code: 0 on success, 1 if the document failed.
    """
    print(f"Reading: {filepath}")
    mode = ParseMode.STRICT if strict else ParseMode.LENIENT
    result = parse_angles(filepath, mode=mode)
    if result is None:
        print("  Failed to read viewing angles (see log).")
        return 1

    zenith, azimuth = result.zenith, result.azimuth
    print(f"  Zenith grids:   {len(zenith)}")
    print(f"  Azimuth grids:  {len(azimuth)}")
    print(f"  Mean angles:    {len(result.mean_angles)} bands")
    print()

    print("Band order:")
    for position, band_id in enumerate(zenith.band_order):
        print(_coverage_line(position, band_id, zenith, azimuth, result))
    print()

    if result.diagnostics:
        print(f"Diagnostics ({len(result.diagnostics)}):")
        for diag in result.diagnostics:
            print(f"  {diag.severity.value:7s} {diag.code}: {diag.message}")
        print()

    if plot is not None:
        plot_band(result, plot)
    return 0


if __name__ == "__main__":
    args = parse_args()
    sys.exit(dump_angles(args.filepath, strict=args.strict, plot=args.plot))
