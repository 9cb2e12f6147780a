import asyncio
import hashlib
from datetime import datetime, timezone
from typing import Annotated, Any, Dict

from pydantic import Field

from ..core.logger import get_logger
from .latency import SIMULATED_LATENCY

logger = get_logger(__name__)

_KNOWN_LOCATIONS: Dict[str, Dict[str, Any]] = {
    "new york": {"temperature_c": 18, "conditions": "partly cloudy", "humidity": 62},
    "london": {"temperature_c": 12, "conditions": "light rain", "humidity": 81},
    "tokyo": {"temperature_c": 21, "conditions": "clear", "humidity": 55},
    "berlin": {"temperature_c": 9, "conditions": "overcast", "humidity": 74},
}

_CONDITIONS = ["clear", "partly cloudy", "overcast", "light rain", "windy"]


async def weather(
    location: Annotated[str, Field(description="City or place to get the current weather for, e.g. 'New York'")],
) -> Dict[str, Any]:
    """Get the current weather for a location."""
    await asyncio.sleep(SIMULATED_LATENCY["weather"])
    logger.debug(f"Weather tool called for {location}")

    key = location.strip().lower()
    report = _KNOWN_LOCATIONS.get(key)
    if report is None:
        # Stable pseudo-readings so repeated calls agree
        digest = int(hashlib.sha256(key.encode("utf-8")).hexdigest(), 16)
        report = {
            "temperature_c": digest % 35 - 5,
            "conditions": _CONDITIONS[digest % len(_CONDITIONS)],
            "humidity": 30 + digest % 60,
        }

    return {"location": location, **report, "timestamp": datetime.now(timezone.utc).isoformat()}
