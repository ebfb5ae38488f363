"""
FastAPI REST API for the Flood Readiness Platform

Provides RESTful endpoints for flood risk assessment and decision support.
"""

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Optional, Tuple
from datetime import datetime
import asyncio
import logging
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.weather_connectors import OpenMeteoConnector, OpenWeatherConnector, TTLCache
from src.risk_engine import (
    DEFAULT_ROUTES,
    Alert,
    ClimateSummary,
    EvacuationDecision,
    Evaluation,
    RainfallHistory,
    RiskAssessment,
    RiskEngine,
    RiskExplanation,
    RouteConfidence,
    WeatherSnapshot,
    generate_alert,
    score_routes,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_CITY = "New Delhi"
DEFAULT_LATITUDE = 28.6139
DEFAULT_LONGITUDE = 77.209

app = FastAPI(
    title="Flood Readiness API",
    description="Flood risk assessment, evacuation guidance and route confidence",
    version="1.0.0"
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize connectors
weather_cache = TTLCache()
weather_connector = OpenWeatherConnector(cache=weather_cache)
precipitation_connector = OpenMeteoConnector()
risk_engine = RiskEngine()


class AlertItem(BaseModel):
    id: int
    level: str
    severity: str
    message: str
    action: str


class RouteResponse(BaseModel):
    id: int
    name: str
    is_safe: bool
    confidence: Optional[float] = None
    confidence_label: Optional[str] = None
    pending: bool = False
    why_text: Optional[str] = None
    why_points: List[str] = []
    best_for: Optional[str] = None
    risk_warning: Optional[str] = None
    path: List[Tuple[float, float]] = []


def _coordinates(lat: Optional[float], lng: Optional[float]) -> Tuple[float, float]:
    if lat is not None and lng is not None:
        return lat, lng
    return DEFAULT_LATITUDE, DEFAULT_LONGITUDE


async def _fetch_weather(city: str, lat: Optional[float], lng: Optional[float]) -> WeatherSnapshot:
    weather = await asyncio.to_thread(weather_connector.get_current_weather, city, lat, lng)
    if weather is None:
        return risk_engine.policy.weather("Your location" if lat is not None else city)
    return weather


async def _fetch_inputs(city: str, lat: Optional[float], lng: Optional[float], past_days: int = 7):
    """Current weather, climate archive and recent window, fetched concurrently"""
    latitude, longitude = _coordinates(lat, lng)
    return await asyncio.gather(
        asyncio.to_thread(weather_connector.get_current_weather, city, lat, lng),
        asyncio.to_thread(precipitation_connector.get_climate_series, latitude, longitude),
        asyncio.to_thread(precipitation_connector.get_recent_window, latitude, longitude, past_days),
    )


async def _evaluate(city: str, lat: Optional[float], lng: Optional[float]) -> Evaluation:
    latitude, longitude = _coordinates(lat, lng)
    (weather, climate, recent), history = await asyncio.gather(
        _fetch_inputs(city, lat, lng),
        asyncio.to_thread(
            precipitation_connector.get_recent_window, latitude, longitude, RiskEngine.HISTORY_DAYS
        ),
    )

    location = None
    if weather is None:
        location = "Your location" if lat is not None else city

    return risk_engine.evaluate(
        weather,
        climate,
        recent,
        location=location,
        history_window=history,
    )


# API Endpoints

@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": "Flood Readiness API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "weather": "/api/weather",
            "risk": "/api/risk",
            "alerts": "/api/alerts",
            "climate": "/api/climate",
            "rainfall_history": "/api/rainfall-history",
            "risk_explanation": "/api/risk-explanation",
            "evacuation": "/api/evacuation",
            "routes": "/api/routes",
            "assessment": "/api/assessment"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "cache_entries": len(weather_cache),
        "services": {
            "openweather_api": "demo" if weather_connector.demo_mode else "operational",
            "open_meteo_api": "operational"
        }
    }


@app.get("/api/weather", response_model=WeatherSnapshot)
async def get_weather(
    city: str = Query(DEFAULT_CITY, min_length=1),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """Current weather for a city or coordinate pair"""
    return await _fetch_weather(city, lat, lng)


@app.get("/api/risk", response_model=RiskAssessment)
async def get_risk(
    city: str = Query(DEFAULT_CITY, min_length=1),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """Flood risk level from current rainfall"""
    weather = await asyncio.to_thread(weather_connector.get_current_weather, city, lat, lng)
    return risk_engine.assess_risk(weather)


@app.get("/api/alerts", response_model=List[AlertItem])
async def get_alerts(
    city: str = Query(DEFAULT_CITY, min_length=1),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """Active alert for the current risk level"""
    weather = await _fetch_weather(city, lat, lng)
    alert: Alert = generate_alert(risk_engine.assess_risk(weather).level)
    return [AlertItem(id=1, **alert.model_dump())]


@app.get("/api/climate", response_model=ClimateSummary)
async def get_climate(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """Seasonal pattern and notable rainfall event over the past year"""
    latitude, longitude = _coordinates(lat, lng)
    series = await asyncio.to_thread(precipitation_connector.get_climate_series, latitude, longitude)
    return risk_engine.climate_summary(series)


@app.get("/api/rainfall-history", response_model=RainfallHistory)
async def get_rainfall_history(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """Daily rainfall over the last 14 days"""
    latitude, longitude = _coordinates(lat, lng)
    window = await asyncio.to_thread(
        precipitation_connector.get_recent_window, latitude, longitude, RiskEngine.HISTORY_DAYS
    )
    return risk_engine.rainfall_history(window)


@app.get("/api/risk-explanation", response_model=RiskExplanation)
async def get_risk_explanation(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """Why the current conditions are (or are not) risky"""
    latitude, longitude = _coordinates(lat, lng)
    climate, recent = await asyncio.gather(
        asyncio.to_thread(precipitation_connector.get_climate_series, latitude, longitude),
        asyncio.to_thread(precipitation_connector.get_recent_window, latitude, longitude),
    )
    return risk_engine.explain_history(climate, recent)


@app.get("/api/evacuation", response_model=EvacuationDecision)
async def get_evacuation(
    city: str = Query(DEFAULT_CITY, min_length=1),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """Evacuation recommendation"""
    evaluation = await _evaluate(city, lat, lng)
    return evaluation.evacuation


@app.get("/api/routes", response_model=List[RouteResponse])
async def get_routes(
    city: str = Query(DEFAULT_CITY, min_length=1),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """Evacuation routes with confidence for the current conditions"""
    weather, climate, recent = await _fetch_inputs(city, lat, lng)
    risk = risk_engine.assess_risk(weather)
    explanation = risk_engine.explain_history(climate, recent)

    scores: List[RouteConfidence] = score_routes(DEFAULT_ROUTES, risk, explanation)

    return [
        RouteResponse(
            id=route.id,
            name=route.name,
            is_safe=route.is_safe,
            confidence=score.confidence,
            confidence_label=score.label,
            pending=score.pending,
            why_text=route.metadata.get("why_text"),
            why_points=route.metadata.get("why_points", []),
            best_for=route.metadata.get("best_for"),
            risk_warning=route.metadata.get("risk_warning"),
            path=[tuple(point) for point in route.metadata.get("path", [])],
        )
        for route, score in zip(DEFAULT_ROUTES, scores)
    ]


@app.get("/api/assessment", response_model=Evaluation)
async def get_assessment(
    city: str = Query(DEFAULT_CITY, min_length=1),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180)
):
    """
    Full evaluation for a location

    Returns risk, alert, explanation, evacuation decision, route confidence,
    climate summary and rainfall history in one record.
    """
    return await _evaluate(city, lat, lng)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
