from __future__ import annotations

import os
import time

import pytest
from PyQt5 import QtCore, QtGui
from PyQt5.QtCore import Qt

DATA_NAME = "Survey_001_LD_220301_093000_1"
CAMERA_NAME = "Survey_001_CM_220301_093000_1"
INDEX_NAME = "Survey_001_DC_220301_093000_1"
SYNC_NAME = "CameraSync_220301_093000_1_0.dat"
INDEXED_NAME = "CameraSync_220301_093000_1_T.dat"


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    # image format plugins are resolved through the application object
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def restore_tz():
    old = os.environ.get("TZ")
    yield
    if old is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = old
    if hasattr(time, "tzset"):
        time.tzset()


def sync_line(index: int, image_name: str, sow: float) -> str:
    # 13 whitespace-separated fields, seconds of week last
    filler = " ".join(["0.000"] * 10)
    return f"{index:6d} {image_name} {filler} {sow:.6f}"


def write_jpeg(path, width: int, height: int) -> None:
    img = QtGui.QImage(width, height, QtGui.QImage.Format_RGB32)
    img.fill(Qt.darkCyan)
    assert img.save(str(path), "JPG")


@pytest.fixture
def dataset(tmp_path):
    """Data and camera folders for 2022-03-01 09:30:00 with an empty sync log."""
    data = tmp_path / DATA_NAME
    camera = tmp_path / CAMERA_NAME
    data.mkdir()
    camera.mkdir()
    (camera / SYNC_NAME).write_text("")

    class Dataset:
        data_folder = str(data)
        camera_folder = str(camera)
        index_folder = str(tmp_path / INDEX_NAME)
        sync_path = camera / SYNC_NAME
        indexed_path = tmp_path / INDEX_NAME / INDEXED_NAME

        def write_sync(self, lines):
            self.sync_path.write_text("".join(ln + "\n" for ln in lines))

        def add_image(self, name: str, width: int = 320, height: int = 240):
            write_jpeg(camera / name, width, height)

    return Dataset()
