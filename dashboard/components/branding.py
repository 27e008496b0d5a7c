"""
Dashboard Branding Component

Colors and styling shared by every generation dashboard page.
"""

import streamlit as st

from viz.heat_intensity import DARK_TEXT, NEUTRAL_BACKGROUND

# Brand Colors
BRAND_DARK = DARK_TEXT
BRAND_SLATE = "#34495e"
BRAND_BLUE = "#3498db"
BRAND_RED = "#e74c3c"
BRAND_GRAY = "#7f8c8d"
BRAND_LIGHT_GRAY = "#bdc3c7"
BRAND_BACKGROUND = "#f5f5f5"
BAND_FILL = "rgba(135, 206, 250, 0.4)"

# Series colors used by the rolling and demand charts
SERIES_COLORS = {
    "historical_avg": "#2980b9",
    "previous_year": BRAND_DARK,
    "current_year": BRAND_RED,
}


def apply_theme():
    """
    Apply the dashboard CSS styling.
    Call this at the start of each page.
    """
    st.markdown(f"""
    <style>
        h1, h2, h3, h4 {{
            color: {BRAND_DARK} !important;
        }}

        .stButton > button {{
            background-color: {BRAND_SLATE};
            color: #fff;
            border: none;
            font-weight: 600;
        }}

        .stButton > button:hover {{
            background-color: {BRAND_BLUE};
            color: #fff;
        }}

        .heatmap-caption {{
            font-size: 11px;
            color: {BRAND_GRAY};
            font-style: italic;
            text-align: center;
        }}
    </style>
    """, unsafe_allow_html=True)


def render_footer():
    """Render the page footer."""
    st.markdown("---")
    st.markdown(
        f"""<div style="text-align: center; color: {BRAND_GRAY}; font-size: 0.8rem;">
        Generation Dashboard | Heatmaps, rolling averages and demand
        </div>""",
        unsafe_allow_html=True
    )


def get_plotly_colors():
    """
    Get the color palette for Plotly charts.

    Returns:
        dict with color sequences and individual colors
    """
    return {
        "primary": BRAND_DARK,
        "secondary": BRAND_SLATE,
        "sequence": [
            SERIES_COLORS["historical_avg"],
            SERIES_COLORS["previous_year"],
            SERIES_COLORS["current_year"],
            "#f1c40f",        # Amber
            "#2ecc71",        # Emerald
            "#9b59b6",        # Purple
        ],
        "band": BAND_FILL,
        "neutral": NEUTRAL_BACKGROUND,
    }


def style_plotly_chart(fig):
    """
    Apply dashboard styling to a Plotly figure.

    Args:
        fig: Plotly figure object

    Returns:
        Updated figure
    """
    fig.update_layout(
        font_family="sans-serif",
        font_color=BRAND_DARK,
        title_font_color=BRAND_DARK,
        legend_title_font_color=BRAND_DARK,
        paper_bgcolor="white",
        plot_bgcolor="white",
        colorway=get_plotly_colors()["sequence"],
    )

    fig.update_xaxes(linecolor=BRAND_LIGHT_GRAY)
    fig.update_yaxes(linecolor=BRAND_LIGHT_GRAY)

    return fig
