from __future__ import annotations

import math
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, Iterator, Tuple

from czmil_index.paths import DatasetFolders

SYNC_NAME_TEMPLATE = "CameraSync_{}_0.dat"
INDEXED_NAME_TEMPLATE = "CameraSync_{}_T.dat"

IMAGE_FIELD = 1
SECONDS_FIELD = 12
TIMESTAMP_SEPARATOR = "    "


class SyncRecordError(ValueError):
    def __init__(self, line_no: int, reason: str):
        super().__init__(f"Malformed CameraSync record at line {line_no}: {reason}")
        self.line_no = line_no


@dataclass(frozen=True)
class SyncRecord:
    line: str
    line_no: int
    image_name: str
    seconds_of_week: float


def camera_sync_path(folders: DatasetFolders) -> str:
    return os.path.join(folders.camera_folder, SYNC_NAME_TEMPLATE.format(folders.camera_wide_id))


def indexed_sync_path(folders: DatasetFolders) -> str:
    return os.path.join(folders.index_folder, INDEXED_NAME_TEMPLATE.format(folders.data_wide_id))


def count_records(fp: IO[str]) -> int:
    n = sum(1 for _ in fp)
    fp.seek(0)
    return n


def parse_sync_record(line: str, line_no: int) -> SyncRecord:
    line = line.rstrip("\r\n")
    parts = line.split()
    if len(parts) <= SECONDS_FIELD:
        raise SyncRecordError(line_no, f"expected at least {SECONDS_FIELD + 1} fields, got {len(parts)}")

    try:
        sow = float(parts[SECONDS_FIELD])
    except ValueError:
        raise SyncRecordError(line_no, f"seconds of week is not a number: {parts[SECONDS_FIELD]!r}")
    if not math.isfinite(sow):
        raise SyncRecordError(line_no, f"seconds of week is not finite: {parts[SECONDS_FIELD]!r}")

    return SyncRecord(line=line, line_no=line_no, image_name=parts[IMAGE_FIELD], seconds_of_week=sow)


def format_indexed_record(record: SyncRecord, picture_time: int) -> str:
    return f"{record.line}{TIMESTAMP_SEPARATOR}{int(picture_time)}"


@contextmanager
def open_sync_files(folders: DatasetFolders) -> Iterator[Tuple[IO[str], IO[str], int]]:
    """Open the camera sync log and the indexed output log.

    Yields (input file, output file, record count). The input is rewound after
    counting. The index folder is created when missing.
    """
    with open(camera_sync_path(folders), "r") as cfp:
        num_recs = count_records(cfp)
        os.makedirs(folders.index_folder, exist_ok=True)
        with open(indexed_sync_path(folders), "w") as tfp:
            yield cfp, tfp, num_recs
