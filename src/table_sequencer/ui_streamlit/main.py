from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

_SRC_ROOT = Path(__file__).resolve().parents[2]
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

load_dotenv(_SRC_ROOT.parent / ".env", override=False)

from table_sequencer.container import build_services
from table_sequencer.domain.errors import TableSequencerError
from table_sequencer.logging_setup import configure_logging
from table_sequencer.settings import LOG_LEVEL, SHOW_RENAME_SQL
from table_sequencer.ui_streamlit.helpers import _to_uploaded_files, _upload_signature
from table_sequencer.ui_streamlit.tables_view import render_tables_view


def _init_state() -> None:
    st.session_state.setdefault("services", None)
    st.session_state.setdefault("loaded_upload", ())
    st.session_state.setdefault("export_result", None)
    st.session_state.setdefault("ui_error", None)


def _get_services():
    if st.session_state["services"] is None:
        st.session_state["services"] = build_services()
    return st.session_state["services"]


def _handle_upload(service, widget_files) -> None:
    signature = _upload_signature(widget_files)
    if signature == st.session_state.get("loaded_upload"):
        return
    st.session_state["loaded_upload"] = signature
    if not signature:
        return
    try:
        order = service.load_file(_to_uploaded_files(widget_files))
        st.session_state["export_result"] = None
        st.info(f"Loaded {service.file_name} with {len(order)} tables.")
    except TableSequencerError as exc:
        st.error(f"Load failed: {exc}")


def main() -> None:
    configure_logging(LOG_LEVEL)
    st.set_page_config(page_title="Altium Designer Component SQLite DB renamer")
    _init_state()
    st.title("Altium Designer Component SQLite DB renamer")

    try:
        services = _get_services()
    except TableSequencerError as exc:
        st.error(f"SQLite is not available: {exc}")
        return
    service = services["reorder_service"]

    widget_files = st.file_uploader(
        "Drop a .db, .sqlite or .sqlite3 file",
        accept_multiple_files=True,
        help="Exactly one database file is accepted.",
    )
    _handle_upload(service, widget_files)

    ui_error = st.session_state.get("ui_error")
    if ui_error:
        st.error(ui_error)
        st.session_state["ui_error"] = None

    if service.file_name is None:
        return

    st.subheader("Export")
    if st.button("Export sqlite"):
        try:
            st.session_state["export_result"] = service.export()
        except TableSequencerError as exc:
            st.session_state["export_result"] = None
            st.error(f"Export failed: {exc}")

    result = st.session_state.get("export_result")
    if result is not None:
        st.success(f"Renamed {len(result.ops)} tables.")
        st.download_button(
            "Download database",
            data=result.data,
            file_name=result.file_name,
            mime="application/octet-stream",
        )

    render_tables_view(service, show_sql=SHOW_RENAME_SQL)


if __name__ == "__main__":
    main()
