from __future__ import annotations

import os

DEFAULT_EXPORT_FILENAME = os.getenv("DEFAULT_EXPORT_FILENAME", "reordered.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SHOW_RENAME_SQL = os.getenv("SHOW_RENAME_SQL", "1").lower() in {"1", "true", "yes", "on"}
