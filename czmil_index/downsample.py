from __future__ import annotations

import os
from typing import Optional, Tuple

from PyQt5 import QtGui
from PyQt5.QtCore import Qt

from czmil_index.common import _warn, nint

TARGET_WIDTH = 1024
SCALED_SUFFIX = "_scaled"
SCALED_EXTENSION = ".jpeg"
SAVE_FORMAT = "JPG"


def scaled_size(width: int, height: int, target_width: int = TARGET_WIDTH) -> Tuple[int, int]:
    if width <= 0:
        raise ValueError(f"Image width must be > 0 (got {width})")
    return target_width, nint(float(target_width) * float(height) / float(width))


def scaled_image_path(index_folder: str, image_name: str) -> str:
    # base name stops at the first dot, "IMG_0001.raw.jpg" -> "IMG_0001"
    base = os.path.basename(image_name).split(".", 1)[0]
    return os.path.join(index_folder, f"{base}{SCALED_SUFFIX}{SCALED_EXTENSION}")


def downsample_image(src_path: str, index_folder: str, target_width: int = TARGET_WIDTH) -> Optional[str]:
    """Write a TARGET_WIDTH-wide JPEG copy of src_path into index_folder.

    Returns the written path, or None when the source could not be decoded or
    the copy could not be saved. Both cases are reported on stderr and are not
    fatal.
    """
    reader = QtGui.QImageReader(src_path)
    full_res = reader.read()
    if full_res.isNull():
        _warn(f"Unable to read image {src_path} - {reader.errorString()}")
        return None

    new_w, new_h = scaled_size(full_res.width(), full_res.height(), target_width)
    scaled = full_res.scaled(new_w, new_h, Qt.IgnoreAspectRatio, Qt.SmoothTransformation)
    del full_res

    out_path = scaled_image_path(index_folder, src_path)
    ok = scaled.save(out_path, SAVE_FORMAT)
    del scaled
    if not ok:
        _warn(f"Unable to write scaled image {out_path}")
        return None
    return out_path
