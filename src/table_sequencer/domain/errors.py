from __future__ import annotations


class TableSequencerError(RuntimeError):
    """Base class for failures surfaced to the user."""


class UnsupportedFileError(TableSequencerError):
    pass


class MultiFileError(TableSequencerError):
    pass


class InvalidOrderError(TableSequencerError):
    pass


class CyclicRenameError(TableSequencerError):
    pass


class ExportFailedError(TableSequencerError):
    pass


class DatabaseLoadError(TableSequencerError):
    pass


class NoDatabaseLoadedError(TableSequencerError):
    pass


class EngineUnavailableError(TableSequencerError):
    pass
