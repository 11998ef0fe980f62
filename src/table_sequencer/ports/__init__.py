from .database_port import DatabaseEnginePort, DatabasePort

__all__ = ["DatabaseEnginePort", "DatabasePort"]
