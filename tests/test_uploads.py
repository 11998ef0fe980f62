import pytest

from table_sequencer.domain.errors import MultiFileError, UnsupportedFileError
from table_sequencer.domain.models import UploadedFile
from table_sequencer.domain.uploads import (
    export_file_name,
    is_supported_filename,
    select_single_upload,
)


def test_supported_extensions() -> None:
    assert is_supported_filename("parts.db")
    assert is_supported_filename("parts.sqlite")
    assert is_supported_filename("parts.sqlite3")
    assert not is_supported_filename("parts.csv")
    assert not is_supported_filename("parts.db.bak")
    assert not is_supported_filename("parts.DB")


def test_select_single_upload() -> None:
    upload = UploadedFile(name="parts.sqlite3", data=b"data")
    assert select_single_upload([upload]) is upload


def test_select_single_upload_rejects_many() -> None:
    files = [UploadedFile("a.db", b""), UploadedFile("b.db", b"")]
    with pytest.raises(MultiFileError, match="Only one file"):
        select_single_upload(files)
    with pytest.raises(MultiFileError):
        select_single_upload([])


def test_select_single_upload_rejects_extension() -> None:
    with pytest.raises(UnsupportedFileError, match="parts.xlsx"):
        select_single_upload([UploadedFile("parts.xlsx", b"")])


def test_export_file_name_defaults() -> None:
    assert export_file_name("parts.db", "reordered.db") == "parts.db"
    assert export_file_name(None, "reordered.db") == "reordered.db"
