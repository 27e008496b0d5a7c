"""
Rolling Averages

Current and previous year generation per fuel type against the historical
average and min/max range. Demand is shown as weekly consumption.
"""

import sys
from datetime import date
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from api.errors import ApiError
from dashboard.components.branding import apply_theme, render_footer
from dashboard.components.charts import apply_viewport, demand_figure, rolling_figure
from dashboard.components.controls import (
    get_client,
    get_viewport,
    render_login,
    render_zoom_toolbar,
    use_sample_data,
)
from data_gen.generate import generate_demand_series, generate_rolling_set
from viz.config import get_fuel_types, load_config, plot_box

st.set_page_config(page_title="Rolling Averages", page_icon="📈", layout="wide")

apply_theme()
client = get_client()
render_login(client)

config = load_config()
fuel_types = get_fuel_types(config)
current_year = date.today().year

st.title("Rolling Averages")

selected = st.radio(
    "Series",
    options=[f["key"] for f in fuel_types],
    format_func=lambda k: next(f["label"] for f in fuel_types if f["key"] == k),
    horizontal=True,
)

# ============== Data ==============

try:
    if use_sample_data():
        rolling = generate_rolling_set([f["key"] for f in fuel_types if f["key"] != "consumption"])
        demand = generate_demand_series()
    else:
        with st.spinner("Loading chart data..."):
            rolling = client.get_rolling_data()
            demand = client.get_demand_data()
except ApiError as e:
    st.error(e.message or "Failed to load chart data.")
    st.stop()

# ============== Chart ==============

box = plot_box(width=900, config=config)
viewport = get_viewport("rolling_chart", width=box.width, height=box.height)
render_zoom_toolbar(viewport, "rolling_chart")

if selected == "consumption":
    if not demand.year(current_year - 1) and not demand.year(current_year):
        st.info("No data available for this series.")
        st.stop()
    fig = demand_figure(demand, current_year, box)
else:
    series = rolling.get(selected)
    if series is None or not (series.historical_avg or series.years):
        st.info("No data available for this series.")
        st.stop()
    fig = rolling_figure(series, current_year, box)

apply_viewport(fig, viewport.state, box)
st.plotly_chart(fig, use_container_width=True)

render_footer()
