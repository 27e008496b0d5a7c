"""
Generation Heatmaps

Hour x plant generation grid for one fuel type and day, with a zoom
toolbar. Cells are colored relative to the peak plant of each hour.
"""

import sys
from datetime import date, timedelta
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from api.errors import ApiError
from dashboard.components.branding import apply_theme, render_footer
from dashboard.components.charts import heatmap_table
from dashboard.components.controls import (
    get_client,
    get_viewport,
    render_login,
    render_zoom_toolbar,
    use_sample_data,
)
from data_gen.generate import generate_value_matrix
from viz.config import load_config

st.set_page_config(page_title="Generation Heatmaps", page_icon="⚡", layout="wide")

apply_theme()
client = get_client()
render_login(client)

config = load_config()
heatmaps = config.get("heatmaps", {})

st.title("Generation Heatmaps")

# ============== Filters ==============

col1, col2, col3, col4 = st.columns(4)

with col1:
    fuel = st.selectbox(
        "Fuel type",
        options=list(heatmaps),
        format_func=lambda k: heatmaps[k].get("label", k),
    )

with col2:
    modes = ["dpp", "realtime"] if heatmaps[fuel].get("realtime") else ["dpp"]
    mode = st.radio("Data", modes, format_func=lambda m: "DPP" if m == "dpp" else "Realtime", horizontal=True)

with col3:
    # Realtime data is only complete up to yesterday
    latest = date.today() - timedelta(days=1) if mode == "realtime" else date.today()
    selected_date = st.date_input(
        "Date",
        value=latest,
        min_value=date.today() - timedelta(days=180),
        max_value=latest,
    )

with col4:
    version = st.radio(
        "Version", ["current", "first"],
        format_func=str.title, horizontal=True,
        disabled=mode == "realtime",
    )

# ============== Data ==============

date_str = selected_date.strftime("%Y-%m-%d")

if use_sample_data():
    matrix = generate_value_matrix(n_plants=10, seed=selected_date.toordinal())
else:
    try:
        with st.spinner("Loading heatmap..."):
            matrix = client.get_heatmap(fuel, date_str, version=version, realtime=mode == "realtime")
    except ApiError as e:
        st.error(e.message or "Failed to load heatmap data")
        st.stop()

if not matrix.hours:
    st.info("No data available for this day.")
    st.stop()

# ============== Heatmap ==============

subtitle = "Realtime Data" if mode == "realtime" else f"{version.title()} Version"
st.subheader(f"{heatmaps[fuel].get('label', fuel)} Generation (MW)")
st.caption(f"{date_str} • {subtitle}")

screen_key = "lignite_heatmap" if fuel == "lignite" else "heatmap"
base_width = 70 + 95 * len(matrix.plants)
viewport = get_viewport(screen_key, width=base_width, height=42 * (len(matrix.hours) + 2))
render_zoom_toolbar(viewport, screen_key)

fig = heatmap_table(matrix, cell_height=int(42 * viewport.scale))
fig.update_layout(width=int(base_width * viewport.scale))
st.plotly_chart(fig, use_container_width=False)

st.markdown(
    '<div class="heatmap-caption">Scroll horizontally & vertically • Use the toolbar to zoom</div>',
    unsafe_allow_html=True,
)

render_footer()
