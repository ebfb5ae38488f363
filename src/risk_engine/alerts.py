"""
Alert Generation

Maps a risk level to the public alert shown on the dashboard.
"""

from .models import Alert, normalize_risk_level


ALERTS = {
    "High": {
        "severity": "Danger",
        "message": "CRITICAL WARNING: Heavy rainfall and high flood risk detected.",
        "action": "Evacuate to higher ground immediately. Do not attempt to cross flooded roads.",
    },
    "Medium": {
        "severity": "Warning",
        "message": "Advisory: Moderate rainfall causing potential waterlogging.",
        "action": "Stay indoors. Avoid low-lying areas and unnecessary travel.",
    },
    "Low": {
        "severity": "Info",
        "message": "Weather conditions are stable.",
        "action": "Stay updated with local news. No immediate action required.",
    },
}


def generate_alert(risk_level: str) -> Alert:
    level = normalize_risk_level(risk_level)
    return Alert(level=level, **ALERTS[level])
