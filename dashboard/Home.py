"""
Generation Dashboard - Home

Entry point: sign-in and an overview of the available screens.
"""

import sys
from pathlib import Path

import streamlit as st

sys.path.insert(0, str(Path(__file__).parent.parent))

from dashboard.components.branding import apply_theme, render_footer
from dashboard.components.controls import get_client, render_login, use_sample_data
from viz.config import load_config

st.set_page_config(page_title="Generation Dashboard", page_icon="⚡", layout="wide")

apply_theme()
client = get_client()
render_login(client)

config = load_config()

st.title("Generation Dashboard")
st.caption("Power generation by plant, fuel type, hour and day")

if use_sample_data():
    st.info("Showing generated sample data. Sign in from the sidebar to load live data.")
elif client.is_authenticated:
    st.success("Connected to the energy data backend.")
else:
    st.warning("Sample data is off but you are not signed in; pages will fail to load.")

col1, col2 = st.columns(2)

with col1:
    st.subheader("Heatmaps")
    st.markdown("Hourly generation per plant, colored relative to each hour's peak plant.")
    for fuel, entry in config.get("heatmaps", {}).items():
        variants = "DPP + realtime" if entry.get("realtime") else "DPP"
        st.markdown(f"- **{entry.get('label', fuel)}** ({variants})")

with col2:
    st.subheader("Rolling Averages")
    st.markdown("Current vs. previous year against the historical average and range.")
    for fuel in config.get("fuel_types", []):
        st.markdown(f"- {fuel['label']}")

render_footer()
