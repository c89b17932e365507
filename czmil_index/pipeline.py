from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import IO, Optional

from czmil_index.downsample import downsample_image
from czmil_index.gps_time import GpsTimeReconstructor
from czmil_index.paths import DatasetFolders
from czmil_index.progress import ProgressReporter
from czmil_index.sync_io import (
    camera_sync_path,
    format_indexed_record,
    indexed_sync_path,
    open_sync_files,
    parse_sync_record,
)


@dataclass
class IndexResult:
    sync_path: str
    indexed_path: str
    records: int
    images_written: int
    images_failed: int
    rolled_over: bool


def index_dataset(folders: DatasetFolders, out: Optional[IO[str]] = None) -> IndexResult:
    """Downsample every camera image and write the timestamped CameraSync log.

    One output line is written per input line whether or not its image could be
    scaled. Malformed records and unreadable log files raise.
    """
    out = out if out is not None else sys.stdout
    recon = GpsTimeReconstructor(folders.date_token)
    count = 0
    written = 0
    failed = 0

    with open_sync_files(folders) as (cfp, tfp, num_recs):
        progress = ProgressReporter(num_recs, stream=out)

        for line_no, line in enumerate(cfp, start=1):
            rec = parse_sync_record(line, line_no)

            jpg_file = os.path.join(folders.camera_folder, rec.image_name)
            if downsample_image(jpg_file, folders.index_folder) is None:
                failed += 1
            else:
                written += 1

            picture_time = recon.picture_time(rec.seconds_of_week)
            tfp.write(format_indexed_record(rec, picture_time) + "\n")

            count += 1
            progress.update(count)

    progress.finish()

    return IndexResult(
        sync_path=camera_sync_path(folders),
        indexed_path=indexed_sync_path(folders),
        records=count,
        images_written=written,
        images_failed=failed,
        rolled_over=recon.rolled_over,
    )
