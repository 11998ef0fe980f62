from .sqlite_database import SQLiteDatabase, SQLiteEngine

__all__ = ["SQLiteDatabase", "SQLiteEngine"]
