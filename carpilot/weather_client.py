"""Current-weather lookup and a one-sentence summary of it."""

from __future__ import annotations

import logging
import math
from typing import Any

import requests

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_UNITS = "metric"

log = logging.getLogger(__name__)


def _dig(node: Any, *path: Any) -> Any:
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or len(node) <= key:
                return None
        elif not isinstance(node, dict):
            return None
        node = node[key] if isinstance(key, int) else node.get(key)
    return node


def _number(value: Any, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


def format_weather(city: str, doc: Any) -> str:
    """Summarise a current-weather document in one sentence."""
    description = _dig(doc, "weather", 0, "description")
    if not isinstance(description, str):
        description = ""
    temperature = _number(_dig(doc, "main", "temp"), math.nan)
    humidity = _dig(doc, "main", "humidity")
    if not isinstance(humidity, int) or isinstance(humidity, bool):
        humidity = 0
    wind = _number(_dig(doc, "wind", "speed"), 0.0)
    return (
        f"The weather in {city} is {description}"
        f", temperature {temperature:.2f} C"
        f", humidity {humidity} %"
        f", wind {wind:.2f} m/s."
    )


class WeatherClient:
    """Fetches current weather for a city name that is already URL-encoded."""

    def __init__(
        self,
        api_key: str,
        *,
        session: requests.Session | None = None,
        base_url: str = DEFAULT_BASE_URL,
        units: str = DEFAULT_UNITS,
        timeout: float = 15.0,
    ) -> None:
        self.api_key = api_key
        self.session = session or requests.Session()
        self.base_url = base_url
        self.units = units
        self.timeout = timeout

    def get_weather_data(self, city: str) -> str:
        """A weather summary for ``city``, or an empty string on failure."""
        url = f"{self.base_url}?q={city}&appid={self.api_key}&units={self.units}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            log.warning("weather request failed: %s", exc)
            return ""
        if response.status_code != 200:
            log.warning("weather HTTP error %s: %s", response.status_code, response.text)
            return ""
        try:
            document = response.json()
        except ValueError:
            log.warning("weather JSON parse error")
            return ""
        return format_weather(city, document)