"""
Production Dashboard — Interactive Dashboard

Run with:  streamlit run app.py
"""

import plotly.graph_objects as go
import streamlit as st

from production_dashboard.config import (
    COMPANY_NAME,
    DASHBOARD_TITLE,
    DEFAULT_WINDOW_DAYS,
    NEG_COLOR,
    PIE_PALETTE,
    POS_COLOR,
    SECTIONS,
    WINDOW_SIZES,
    section_has_sheet,
)
from production_dashboard.dashboard import (
    get_available_dates,
    get_matrix_styles,
    get_matrix_view,
    get_ranking_styles,
    get_ranking_view,
    get_shift_breakdowns,
    get_table_frame,
    get_table_styles,
    get_table_view,
    style_frame,
)
from production_dashboard.kpis import format_pct
from production_dashboard.loaders import fetch_section_rows
from production_dashboard.session import DashboardSession
from production_dashboard.simulator import generate_sheet_rows

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Production Dashboard",
    page_icon="🏭",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Data loading (cached)
# ---------------------------------------------------------------------------
@st.cache_data(ttl=300)
def fetch_rows(section_key: str) -> list[list]:
    if section_has_sheet(section_key):
        return fetch_section_rows(section_key)
    seed = list(SECTIONS).index(section_key)
    return generate_sheet_rows(seed=seed)


if "session" not in st.session_state:
    st.session_state["session"] = DashboardSession()
session: DashboardSession = st.session_state["session"]


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
head_left, head_right = st.columns([5, 1])
with head_left:
    st.title(DASHBOARD_TITLE if session.page == "home" else session.active_label)
with head_right:
    if st.button("☀️ Light" if session.theme == "dark" else "🌙 Dark"):
        session.toggle_theme()
        st.rerun()


# ---------------------------------------------------------------------------
# Helper: pie chart with legend
# ---------------------------------------------------------------------------
def breakdown_chart(breakdown, title: str):
    st.subheader(title)
    if breakdown.is_empty:
        st.info("No data")
        return

    colors = {s.machine: PIE_PALETTE[i % len(PIE_PALETTE)] for i, s in enumerate(breakdown.slices)}
    chart_col, legend_col = st.columns([3, 1])
    with chart_col:
        fig = go.Figure(go.Pie(
            labels=[s.label for s in breakdown.slices],
            values=[s.fraction for s in breakdown.slices],
            marker=dict(colors=[colors[s.machine] for s in breakdown.slices]),
            sort=False,
            direction="clockwise",
            textinfo="percent",
        ))
        fig.update_layout(
            height=380,
            showlegend=False,
            margin=dict(l=10, r=10, t=10, b=10),
            template="plotly_dark" if session.theme == "dark" else "plotly_white",
        )
        st.plotly_chart(fig, use_container_width=True)
    with legend_col:
        st.markdown("**Breakdown**")
        for s in breakdown.legend():
            color = POS_COLOR if s.positive else NEG_COLOR
            st.markdown(
                f"<span style='color:{colors[s.machine]}'>■</span> {s.machine} "
                f"<span style='color:{color}; font-weight:600'>{format_pct(s.percent, signed=True)}</span>",
                unsafe_allow_html=True,
            )


# ===========================================================================
# PAGE: Home
# ===========================================================================
if session.page == "home":
    st.caption("Select a section to view details")
    if session.error:
        st.error(session.error)

    cols = st.columns(len(SECTIONS))
    for i, (key, section) in enumerate(SECTIONS.items()):
        with cols[i]:
            if st.button(f"{section['emoji']}  {section['label']}\n\n{section['hint']}", key=f"open-{key}",
                         use_container_width=True):
                with st.spinner(f"Loading {section['label']}…"):
                    session.open_section(key, fetch_rows)
                st.rerun()


# ===========================================================================
# PAGE: Section report
# ===========================================================================
else:
    store = session.active_store

    if st.button("← Back"):
        session.go_home()
        st.rerun()

    dates = get_available_dates(store)
    if not dates:
        st.warning("No data available.")
        st.stop()

    selected = st.selectbox("Select date", dates, index=len(dates) - 1)

    st.subheader("Production Table (Machine-wise • A then B)")
    day_records = get_table_view(store, selected)
    table = style_frame(get_table_frame(day_records), get_table_styles(day_records))
    st.dataframe(table, use_container_width=True, hide_index=True)

    breakdowns = get_shift_breakdowns(store, selected)
    col_a, col_b = st.columns(2)
    with col_a:
        breakdown_chart(breakdowns["A"], "Shift A")
    with col_b:
        breakdown_chart(breakdowns["B"], "Shift B")

    st.divider()
    st.subheader("Machine-wise % (A / B) — Range")
    from_col, to_col = st.columns(2)
    with from_col:
        start = st.selectbox("From", [""] + dates, index=0)
    with to_col:
        end = st.selectbox("To", [""] + dates, index=0)

    if not start or not end:
        st.caption("Select a start and end date to view data.")
    else:
        matrix = get_matrix_view(store, start, end)
        if matrix.is_empty:
            st.caption("No data for the selected range.")
        else:
            st.dataframe(
                style_frame(matrix.to_frame(display=True), get_matrix_styles(matrix)),
                use_container_width=True,
            )

    st.divider()
    st.subheader("Which machine gives best performance")
    window = st.selectbox(
        "Range",
        WINDOW_SIZES,
        index=WINDOW_SIZES.index(DEFAULT_WINDOW_DAYS),
        format_func=lambda d: f"Last {d} days",
    )
    board = get_ranking_view(store, window)
    st.caption(board.label)
    if not board.has_data:
        st.caption("No data available.")
    elif not board.entries:
        st.caption("No data in this window.")
    else:
        st.dataframe(
            style_frame(board.to_frame(), get_ranking_styles(board)),
            use_container_width=True,
            hide_index=True,
        )

st.divider()
st.caption(f"© {COMPANY_NAME} • Production Dashboard")
