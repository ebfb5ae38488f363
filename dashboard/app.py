"""
Streamlit Dashboard for the Flood Readiness Platform

Interactive dashboard for flood risk, evacuation guidance and rainfall history.
"""

import streamlit as st
import pandas as pd
import plotly.express as px
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.weather_connectors import OpenMeteoConnector, OpenWeatherConnector, TTLCache
from src.risk_engine import DEFAULT_ROUTES, RiskEngine

# Page configuration
st.set_page_config(
    page_title="Flood Readiness Dashboard",
    page_icon="🌧️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize connectors
@st.cache_resource
def get_connectors():
    cache = TTLCache()
    return {
        "weather": OpenWeatherConnector(cache=cache),
        "precipitation": OpenMeteoConnector(),
        "engine": RiskEngine()
    }

connectors = get_connectors()

# Title and description
st.title("🌧️ Flood Readiness Dashboard")
st.markdown("**Flood Risk Assessment & Evacuation Decision Support**")

# Sidebar
st.sidebar.header("Configuration")

# Location input
st.sidebar.subheader("📍 Location")
city = st.sidebar.text_input("City", value="New Delhi")
latitude = st.sidebar.number_input("Latitude", value=28.6139, min_value=-90.0, max_value=90.0, format="%.4f")
longitude = st.sidebar.number_input("Longitude", value=77.2090, min_value=-180.0, max_value=180.0, format="%.4f")

# Quick location buttons
st.sidebar.subheader(" Quick Locations")
col1, col2 = st.sidebar.columns(2)
if col1.button("New Delhi"):
    city, latitude, longitude = "New Delhi", 28.6139, 77.2090
if col2.button("Mumbai"):
    city, latitude, longitude = "Mumbai", 19.0760, 72.8777
if col1.button("Chennai"):
    city, latitude, longitude = "Chennai", 13.0827, 80.2707
if col2.button("Kolkata"):
    city, latitude, longitude = "Kolkata", 22.5726, 88.3639

RISK_COLORS = {"High": "#DC2626", "Medium": "#D97706", "Low": "#16A34A"}

# Analysis button
if st.sidebar.button(" Assess Flood Risk", type="primary"):
    with st.spinner("Fetching weather and rainfall history..."):

        weather = connectors["weather"].get_current_weather(city, latitude, longitude)
        climate = connectors["precipitation"].get_climate_series(latitude, longitude)
        recent = connectors["precipitation"].get_recent_window(latitude, longitude, past_days=7)
        history = connectors["precipitation"].get_recent_window(
            latitude, longitude, past_days=RiskEngine.HISTORY_DAYS
        )

        evaluation = connectors["engine"].evaluate(
            weather,
            climate,
            recent,
            location=None if weather is not None else city,
            history_window=history
        )

        # Store in session state
        st.session_state.evaluation = evaluation
        st.session_state.analysis_complete = True

# Main content
if st.session_state.get("analysis_complete", False):
    evaluation = st.session_state.evaluation
    risk = evaluation.risk
    explanation = evaluation.explanation

    if evaluation.degraded_sources:
        st.caption(f"⚠️ Using estimated data for: {', '.join(evaluation.degraded_sources)}")

    # Summary cards
    st.subheader(f" {evaluation.location}")

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(label="Flood Risk", value=risk.level)

    with col2:
        st.metric(label="Rainfall Now", value=f"{evaluation.weather.rainfall_mm:g} mm")

    with col3:
        st.metric(
            label="Last 7 Days",
            value=f"{explanation.recent_7day_mm:.1f} mm",
            delta=f"{explanation.pct_vs_average}% vs avg week"
        )

    with col4:
        temperature = evaluation.weather.temperature_c
        st.metric(
            label="Conditions",
            value=evaluation.weather.condition,
            delta=f"{temperature:.0f}°C" if temperature is not None else None,
            delta_color="off"
        )

    st.markdown(
        f"<div style='padding:0.75rem;border-radius:0.5rem;color:white;"
        f"background:{RISK_COLORS.get(risk.level, RISK_COLORS['Low'])}'>"
        f"{risk.explanation}</div>",
        unsafe_allow_html=True
    )

    # Evacuation recommendation
    evacuation = evaluation.evacuation
    if evacuation.recommended:
        low, high = evacuation.window_hours
        st.error(f"⚠️ **Evacuation Recommended** - time window: {low}–{high} hours\n\n{evacuation.rationale}")
    else:
        st.success(f"✅ **Stay Alert** - {evacuation.rationale}")

    st.markdown("---")

    tab1, tab2, tab3, tab4 = st.tabs(["📈 Why is this risky?", "🛣️ Evacuation Routes", "🌧️ Rainfall", "📢 Alerts"])

    with tab1:
        st.subheader("Why is this risky?")
        st.info(explanation.narrative)
        st.markdown(f"- **Current vs average:** {explanation.bullet1}")
        st.markdown(f"- **Wettest month?** {explanation.bullet2}")
        st.markdown(f"- **Highest event (1yr):** {explanation.bullet3}")

        climate = evaluation.climate
        col1, col2, col3 = st.columns(3)
        col1.metric("Seasonal Pattern", climate.seasonal_pattern)
        col2.metric("Notable Event", climate.last_major_event)
        col3.metric(
            "Average Daily Rainfall",
            f"{climate.average_daily_mm} mm" if climate.average_daily_mm is not None else "--"
        )

    with tab2:
        st.subheader("Evacuation Routes")
        st.warning("Based on current risk level and historical rainfall, the Safest Route is recommended.")

        candidates = {route.id: route for route in DEFAULT_ROUTES}
        for score in evaluation.routes:
            route = candidates.get(score.route_id)
            marker = "✅" if score.is_safe else "🟡"

            if score.pending:
                confidence = "Calculating…"
            elif score.confidence is not None:
                confidence = f"{score.label} ({score.confidence:.2f})"
            else:
                confidence = "N/A"

            with st.container(border=True):
                st.markdown(f"**{marker} {score.name}** - Confidence: {confidence}")
                if route is not None:
                    for point in route.metadata.get("why_points", []):
                        st.markdown(f"- {point}")
                    if route.metadata.get("best_for"):
                        st.markdown(f"**Best for:** {route.metadata['best_for']}")
                    if route.metadata.get("risk_warning"):
                        st.error(f"⚠️ Risk: {route.metadata['risk_warning']}")

        st.caption("Confidence is calculated using historical rainfall and elevation risk patterns.")

    with tab3:
        st.subheader("Monthly Rainfall (past year)")

        monthly = pd.DataFrame([bar.model_dump() for bar in explanation.monthly_rainfall])
        if not monthly.empty:
            monthly["wettest"] = monthly["key"] == explanation.wettest_month_key
            fig = px.bar(
                monthly,
                x="label",
                y="amount_mm",
                color="wettest",
                labels={"label": "Month", "amount_mm": "Rainfall (mm)", "wettest": "Wettest month"},
                title="Monthly Rainfall" + (" (estimated)" if explanation.estimated else ""),
                color_discrete_map={True: "#1D4ED8", False: "#93C5FD"}
            )
            st.plotly_chart(fig, use_container_width=True)

        st.subheader("Daily Rainfall (last 14 days)")
        daily = pd.DataFrame([bar.model_dump() for bar in evaluation.rainfall_history.bars])
        if not daily.empty:
            fig = px.bar(
                daily,
                x="label",
                y="amount_mm",
                labels={"label": "Day", "amount_mm": "Rainfall (mm)"},
                title="Daily Rainfall" + (" (estimated)" if evaluation.rainfall_history.estimated else "")
            )
            st.plotly_chart(fig, use_container_width=True)

        peak = evaluation.rainfall_history.peak_day
        if peak is not None:
            st.caption(f"Peak day: {peak.date.isoformat()} ({peak.amount_mm:.0f} mm)")

    with tab4:
        alert = evaluation.alert
        if alert.severity == "Danger":
            st.error(f"**{alert.message}**\n\n{alert.action}")
        elif alert.severity == "Warning":
            st.warning(f"**{alert.message}**\n\n{alert.action}")
        else:
            st.info(f"**{alert.message}**\n\n{alert.action}")

else:
    # Instructions
    st.info("👈 Enter a location in the sidebar and click **Assess Flood Risk** to begin.")

    st.markdown("""
    ### About This Dashboard

    This dashboard combines current conditions with a year of rainfall history from:

    - **OpenWeatherMap**: Current temperature, humidity and rainfall
    - **Open-Meteo Archive**: Daily precipitation for the past 12 months
    - **Open-Meteo Forecast**: Rainfall over the last 7 to 14 days

    The risk level comes from current rainfall. Evacuation is recommended only when
    risk is High, the last week was wetter than an average week, and this is
    historically the wettest month.

    ### How to Use

    1. Enter a city and coordinates (or use quick location buttons)
    2. Click "Assess Flood Risk" to fetch data and run the assessment
    3. Review the explanation, routes and rainfall charts in each tab
    """)

# Footer
st.sidebar.markdown("---")
st.sidebar.markdown("""
**Flood Readiness Dashboard**
Version 1.0.0
Data Sources: OpenWeatherMap, Open-Meteo
""")
