#!/usr/bin/env python3
"""
index_camera_images.py

Down-sample all CZMIL camera .jpg files listed in a dataset's CameraSync file to
1024 pixels wide and place them in the indexed camera folder next to the LiDAR
data folder (the data folder path with its last "LD" replaced by "DC").
Also writes a copy of the CameraSync file with an absolute microsecond
timestamp, rebuilt from GPS seconds of week, appended to every record.

    czmil-image-index DATA_FOLDER CAMERA_FOLDER
"""
from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from czmil_index.common import VERSION, _log
from czmil_index.gps_time import force_gmt
from czmil_index.paths import resolve_dataset_folders
from czmil_index.pipeline import index_dataset

EXIT_FAILURE = -1


# ---------------------------- CLI ----------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="czmil-image-index",
        description="Down-sample CZMIL camera images and timestamp the CameraSync file.",
        epilog=(
            "IMPORTANT NOTE: Do not include a trailing file separator in the "
            "DATA_FOLDER or CAMERA_FOLDER names!"
        ),
    )
    parser.add_argument(
        "data_folder",
        metavar="DATA_FOLDER",
        help="Folder containing the CZMIL LiDAR data files (i.e. *.cpf, *.cwf, *.csf, and *.cif files).",
    )
    parser.add_argument(
        "camera_folder",
        metavar="CAMERA_FOLDER",
        help="Folder containing the CZMIL camera images and the CameraSync file.",
    )
    return parser


# ---------------------------- Main ----------------------------

def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        args = build_arg_parser().parse_args(argv)
    except SystemExit as e:
        # argparse has already printed usage; -h exits 0
        if e.code:
            return EXIT_FAILURE
        raise

    _log(f"\n\n {VERSION} \n\n")

    try:
        folders = resolve_dataset_folders(args.data_folder, args.camera_folder)
    except ValueError as e:
        print(f"\n{e}\n", file=sys.stderr)
        return EXIT_FAILURE

    force_gmt()

    try:
        index_dataset(folders)
    except OSError as e:
        # open() failures carry the offending path in e.filename
        print(f"{e.filename}: {e.strerror}" if e.filename else str(e), file=sys.stderr)
        return EXIT_FAILURE
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return EXIT_FAILURE

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("Interrupted.")
        sys.exit(130)
