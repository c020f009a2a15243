"""
Weather Client
OpenWeather current-weather lookups
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

from utils.error_handler import LocationNotFoundError
from utils.logger import LoggerMixin

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
CITY_URL = "https://openweathermap.org/city/{city_id}"

# (first degree, last degree, name), inclusive bounds
WIND_DIRECTIONS = [
    (0, 25, "North"),
    (26, 70, "Northeast"),
    (71, 110, "East"),
    (111, 155, "Southeast"),
    (156, 200, "South"),
    (201, 250, "Southwest"),
    (251, 290, "West"),
    (291, 335, "Northwest"),
    (336, 360, "North"),
]


def get_wind_direction(deg: float) -> Optional[str]:
    """
    Name the compass sector for a wind direction.

    Only the integer part of ``deg`` is considered; values outside
    0..360 have no direction.
    """
    deg = int(deg)
    for first, last, name in WIND_DIRECTIONS:
        if first <= deg <= last:
            return name
    return None


@dataclass(frozen=True)
class WeatherReport:
    """Current weather for one location (metric units)."""

    city_id: int
    name: str
    temperature: float
    humidity: float
    pressure: float
    wind_speed: Optional[float] = None
    wind_deg: Optional[float] = None
    country: Optional[str] = None
    condition: Optional[str] = None
    cloudiness: Optional[int] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None
    timezone: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "WeatherReport":
        """Build a report from an OpenWeather response body."""
        main = data["main"]
        wind = data.get("wind") or {}
        sys_data = data.get("sys") or {}
        conditions = data.get("weather") or []
        clouds = data.get("clouds") or {}

        return cls(
            city_id=data["id"],
            name=data["name"],
            temperature=main["temp"],
            humidity=main["humidity"],
            pressure=main["pressure"],
            wind_speed=wind.get("speed"),
            wind_deg=wind.get("deg"),
            country=sys_data.get("country"),
            condition=conditions[0].get("main") if conditions else None,
            cloudiness=clouds.get("all"),
            sunrise=sys_data.get("sunrise"),
            sunset=sys_data.get("sunset"),
            timezone=data.get("timezone"),
        )

    @property
    def location(self) -> str:
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name

    @property
    def url(self) -> str:
        return CITY_URL.format(city_id=self.city_id)

    @property
    def temperature_fahrenheit(self) -> float:
        return self.temperature * 1.8 + 32.0


class WeatherClient(LoggerMixin):
    """Thin async client for the OpenWeather current-weather API."""

    def __init__(self, api_key: str, session: Optional[aiohttp.ClientSession] = None):
        super().__init__("Weather")
        self.api_key = api_key
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=15))
            self._owns_session = True
        return self._session

    async def get_by_city(self, city: str) -> WeatherReport:
        """
        Fetch the current weather for a city query.

        Args:
            city: Free-text location, e.g. "London" or "Paris, FR"

        Returns:
            WeatherReport

        Raises:
            LocationNotFoundError: If the location is unknown or the lookup fails
        """
        session = await self._get_session()
        params = {"q": city, "appid": self.api_key, "units": "metric"}

        try:
            async with session.get(OPENWEATHER_URL, params=params) as response:
                if response.status != 200:
                    self.debug(f"Lookup for {city!r} returned HTTP {response.status}")
                    raise LocationNotFoundError()
                data = await response.json()
        except (aiohttp.ClientError, ValueError) as e:
            self.warning(f"Weather lookup failed for {city!r}: {e}")
            raise LocationNotFoundError() from e

        try:
            return WeatherReport.from_json(data)
        except (KeyError, TypeError) as e:
            self.warning(f"Unexpected weather payload for {city!r}: {e}")
            raise LocationNotFoundError() from e

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
