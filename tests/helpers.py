"""Chart payloads shared across the test-suite."""

from __future__ import annotations

CUSPS = [350.0, 20.0, 50.0, 80.0, 110.0, 140.0, 170.0, 200.0, 230.0, 260.0, 290.0, 320.0]


def natal_payload() -> dict:
    return {
        "name": "Primary",
        "cusps": list(CUSPS),
        "ascendant": 350.0,
        "midheaven": 260.0,
        "bodies": [
            {"name": "Sun", "longitude": 10.0, "speed": 1.0},
            {"name": "Moon", "longitude": 130.0, "speed": 13.0},
            {"name": "Mercury", "longitude": 25.0, "speed": 1.5},
            {"name": "Venus", "longitude": 40.0, "speed": -0.5},
            {"name": "Mars", "longitude": 100.0, "speed": 0.6},
            {"name": "Jupiter", "longitude": 250.0, "speed": 0.1},
            {"name": "Saturn", "longitude": 190.0, "speed": 0.05},
            {"name": "Uranus", "longitude": 300.0, "speed": 0.02},
            {"name": "Neptune", "longitude": 330.0, "speed": 0.01},
            {"name": "Pluto", "longitude": 272.0, "speed": -0.01},
            {"name": "North Node", "longitude": 60.0, "speed": -0.05},
            {"name": "Lilith", "longitude": 200.0, "speed": 0.1},
        ],
    }


def partner_payload() -> dict:
    return {
        "name": "Partner",
        "cusps": [(cusp + 40.0) % 360.0 for cusp in CUSPS],
        "ascendant": 30.0,
        "midheaven": 300.0,
        "bodies": {
            "sun": {"longitude": 12.0, "speed": 1.0},
            "moon": {"longitude": 250.0, "speed": 12.0},
            "mercury": 355.0,
            "venus": 70.0,
            "mars": 190.0,
        },
    }
