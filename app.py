import logging
from contextlib import contextmanager
from typing import Optional

import altair as alt
import streamlit as st

from nutrition_core.charts import indicator_chart
from nutrition_core.data import load_dashboard_state
from nutrition_core.state import DashboardState
from nutrition_core.views import district_table, summary_sentence

alt.data_transformers.disable_max_rows()
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("nutrition_dashboard")

STATE_KEY = "dashboard_state"


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .card-actions {font-size: 0.9rem;color: #2563eb;}
        .callout {background: #eff6ff;border-left: 4px solid #60a5fa;padding: 12px 16px;color: #1e40af;
                  font-size: 1.05rem;margin-bottom: 12px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str, actions: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
            <div class="card-actions">{actions or ""}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def _log_selection(state: DashboardState) -> None:
    logger.info("Region changed to %s", state.selected_region)


def get_state() -> DashboardState:
    state = st.session_state.get(STATE_KEY)
    if state is None:
        with st.spinner("Loading dashboard data..."):
            state = load_dashboard_state()
        state.subscribe(_log_selection)
        st.session_state[STATE_KEY] = state
    return state


def render_region_page(state: DashboardState):
    summary = state.selected_summary
    if summary is None:
        st.info("No districts with both meal coverage and nutrition data were found.")
        return

    with card(f"{summary.region} - Average Indicators"):
        st.altair_chart(indicator_chart(summary), use_container_width=True)

    st.markdown(f"<div class='callout'>{summary_sentence(summary)}</div>", unsafe_allow_html=True)

    table = district_table(summary)
    with card(f"District-wise Data for {summary.region}"):
        st.dataframe(table, hide_index=True, use_container_width=True)
        st.download_button(
            "Download CSV",
            data=table.to_csv(index=False).encode("utf-8"),
            file_name=f"{summary.region.replace(' ', '_').lower()}_districts.csv",
            mime="text/csv",
        )


st.set_page_config(page_title="Nutrition & Growth – India Dashboard", layout="wide")
inject_base_styles()
st.title("Nutrition & Growth – India Dashboard")
st.caption("Analyzing school meal coverage and child nutrition outcomes across Indian districts")

if st.button("Refresh"):
    st.session_state.pop(STATE_KEY, None)
    st.rerun()

dashboard_state = get_state()
if not dashboard_state.is_ready:
    st.error("Dashboard data is unavailable. Check the CSV files in data/ and press Refresh.")
    st.stop()

regions = dashboard_state.regions
if regions:
    chosen = st.selectbox(
        "Select State:",
        options=regions,
        index=regions.index(dashboard_state.selected_region),
    )
    dashboard_state.select(chosen)

render_region_page(dashboard_state)
