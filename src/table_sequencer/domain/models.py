from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParsedName:
    sequence_prefix: int | None
    bare_name: str


@dataclass(frozen=True)
class RenameOp:
    old_name: str
    new_name: str


@dataclass
class UploadedFile:
    name: str
    data: bytes


@dataclass
class ExportResult:
    file_name: str
    data: bytes
    ops: list[RenameOp] = field(default_factory=list)
