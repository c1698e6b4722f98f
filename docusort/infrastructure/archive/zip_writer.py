"""Zip archive writer for multi-file exports."""
from __future__ import annotations

import zipfile
from io import BytesIO
from typing import Iterable, Tuple

# Fixed member timestamp so identical inputs give identical archives.
_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class ZipArchiveWriter:
    def write(self, files: Iterable[Tuple[str, bytes]]) -> bytes:
        buffer = BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            for name, content in files:
                info = zipfile.ZipInfo(name, date_time=_FIXED_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                archive.writestr(info, content)
        return buffer.getvalue()
