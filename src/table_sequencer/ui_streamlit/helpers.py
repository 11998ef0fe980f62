from __future__ import annotations

from typing import Any, Iterable

from table_sequencer.domain.models import UploadedFile


def _to_uploaded_files(widget_files: Iterable[Any] | None) -> list[UploadedFile]:
    if not widget_files:
        return []
    return [UploadedFile(name=item.name, data=item.getvalue()) for item in widget_files]


def _upload_signature(widget_files: Iterable[Any] | None) -> tuple[tuple[str, int], ...]:
    if not widget_files:
        return ()
    return tuple((item.name, item.size) for item in widget_files)
