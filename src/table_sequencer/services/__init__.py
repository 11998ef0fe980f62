from .reorder_service import SessionState, TableReorderService

__all__ = ["SessionState", "TableReorderService"]
