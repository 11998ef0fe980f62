from __future__ import annotations

import streamlit as st

from table_sequencer.domain.errors import TableSequencerError
from table_sequencer.domain.reordering import display_label
from table_sequencer.domain.sql_emitter import build_rename_script
from table_sequencer.services.reorder_service import TableReorderService


def _move(service: TableReorderService, old_index: int, new_index: int) -> None:
    try:
        service.move_table(old_index, new_index)
        st.session_state["export_result"] = None
    except (TableSequencerError, IndexError) as exc:
        st.session_state["ui_error"] = f"Move failed: {exc}"


def render_tables_view(service: TableReorderService, show_sql: bool) -> None:
    order = service.order
    st.subheader("Tables")
    if not order:
        st.info("The database has no user tables.")
        return

    last_index = len(order) - 1
    for index, name in enumerate(order):
        cols = st.columns([6, 1, 1, 1, 1])
        cols[0].write(display_label(index, name))
        cols[1].button(
            "⤒",
            key=f"top_{index}",
            disabled=index == 0,
            on_click=_move,
            args=(service, index, 0),
            help="Move to top",
        )
        cols[2].button(
            "↑",
            key=f"up_{index}",
            disabled=index == 0,
            on_click=_move,
            args=(service, index, index - 1),
            help="Move up",
        )
        cols[3].button(
            "↓",
            key=f"down_{index}",
            disabled=index == last_index,
            on_click=_move,
            args=(service, index, index + 1),
            help="Move down",
        )
        cols[4].button(
            "⤓",
            key=f"bottom_{index}",
            disabled=index == last_index,
            on_click=_move,
            args=(service, index, last_index),
            help="Move to bottom",
        )

    if show_sql:
        with st.expander("Pending renames", expanded=False):
            try:
                ops = service.preview_plan()
            except TableSequencerError as exc:
                st.error(f"Preview failed: {exc}")
                return
            if ops:
                st.code(build_rename_script(ops), language="sql")
            else:
                st.info("Every table already has its sequence prefix.")
