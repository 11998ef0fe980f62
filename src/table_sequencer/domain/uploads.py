from __future__ import annotations

from typing import Sequence

from .errors import MultiFileError, UnsupportedFileError
from .models import UploadedFile

ALLOWED_EXTENSIONS = (".db", ".sqlite", ".sqlite3")


def is_supported_filename(name: str) -> bool:
    return name.endswith(ALLOWED_EXTENSIONS)


def select_single_upload(files: Sequence[UploadedFile]) -> UploadedFile:
    """
    Return the one uploaded database file, rejecting anything else.

    Example:
        select_single_upload([UploadedFile("parts.sqlite", b"...")]).name
        # 'parts.sqlite'
    """
    if len(files) != 1:
        raise MultiFileError(f"Only one file is allowed, got {len(files)}")
    upload = files[0]
    if not is_supported_filename(upload.name):
        raise UnsupportedFileError(f"Unrecognized file extension in file {upload.name}")
    return upload


def export_file_name(loaded_name: str | None, default_name: str) -> str:
    return loaded_name or default_name
