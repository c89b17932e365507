from __future__ import annotations

import os
from dataclasses import dataclass

from czmil_index.common import DATA_MARKER, INDEX_MARKER

# Underscore-separated fields of a CZMIL folder base name, e.g.
# "Project_001_LD_220301_093000_1": 3 = YYMMDD, 4 = HHMMSS, 5 = sequence.
DATE_FIELD = 3
TIME_FIELD = 4
WIDE_FIELD = 5


class DatasetMismatchError(ValueError):
    def __init__(self, data_id: str, camera_id: str):
        super().__init__(
            "Error, data and camera folder dates/times do not match!\n"
            f"Data folder: {data_id}\n"
            f"Camera folder: {camera_id}"
        )
        self.data_id = data_id
        self.camera_id = camera_id


@dataclass(frozen=True)
class DatasetFolders:
    data_folder: str
    camera_folder: str
    index_folder: str
    data_id: str
    camera_id: str
    data_wide_id: str
    camera_wide_id: str
    date_token: str


def _fields(folder: str):
    return os.path.basename(folder).split("_")


def index_folder_for(data_folder: str) -> str:
    pos = data_folder.rfind(DATA_MARKER)
    if pos < 0:
        raise ValueError(f"Data folder name does not contain '{DATA_MARKER}': {data_folder}")
    return data_folder[:pos] + INDEX_MARKER + data_folder[pos + len(DATA_MARKER):]


def dataset_id(folder: str, wide: bool = False) -> str:
    last = WIDE_FIELD if wide else TIME_FIELD
    return "_".join(_fields(folder)[DATE_FIELD:last + 1])


def resolve_dataset_folders(data_folder: str, camera_folder: str) -> DatasetFolders:
    index_folder = index_folder_for(data_folder)

    data_id = dataset_id(data_folder)
    camera_id = dataset_id(camera_folder)
    if data_id != camera_id:
        raise DatasetMismatchError(data_id, camera_id)

    cam_fields = _fields(camera_folder)
    date_token = cam_fields[DATE_FIELD] if len(cam_fields) > DATE_FIELD else ""

    return DatasetFolders(
        data_folder=data_folder,
        camera_folder=camera_folder,
        index_folder=index_folder,
        data_id=data_id,
        camera_id=camera_id,
        data_wide_id=dataset_id(data_folder, wide=True),
        camera_wide_id=dataset_id(camera_folder, wide=True),
        date_token=date_token,
    )
