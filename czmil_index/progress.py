from __future__ import annotations

import sys
from typing import IO, Optional

from czmil_index.common import nint


class ProgressReporter:
    """Fixed-format "NNN% of files converted" spinner, rewritten in place once per change (not expressible with tqdm)."""

    def __init__(self, total: int, stream: Optional[IO[str]] = None):
        self.total = int(total)
        self.stream = stream if stream is not None else sys.stdout
        self.last_percent = -1

    def update(self, count: int) -> None:
        if self.total <= 0:
            return
        percent = nint(100.0 * float(count) / float(self.total))
        if percent != self.last_percent:
            self.stream.write(f"{percent:03d}% of files converted\r")
            self.stream.flush()
            self.last_percent = percent

    def finish(self) -> None:
        self.stream.write("100% of files converted\n\n")
        self.stream.flush()
