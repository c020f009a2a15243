"""Tests for the weather client, report rendering and the weather command."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import aiohttp
import pytest

from commands.utility_commands import build_weather_embed, format_utc_offset
from conftest import field_map, sent_embeds
from utils.error_handler import LocationNotFoundError
from utils.weather import OPENWEATHER_URL, WeatherClient, WeatherReport, get_wind_direction

PAYLOAD = {
    "id": 2643743,
    "name": "London",
    "weather": [{"main": "Clouds", "description": "overcast clouds"}],
    "main": {"temp": -3.5, "humidity": 81, "pressure": 1013},
    "wind": {"speed": 4.6, "deg": 45},
    "clouds": {"all": 90},
    "sys": {"country": "GB", "sunrise": 1700000000, "sunset": 1700030000},
    "timezone": 3600,
}


class TestWindDirection:
    @pytest.mark.parametrize(
        "deg, expected",
        [
            (0, "North"),
            (25, "North"),
            (25.9, "North"),
            (26, "Northeast"),
            (45, "Northeast"),
            (90, "East"),
            (135, "Southeast"),
            (181, "South"),
            (200, "South"),
            (201, "Southwest"),
            (270, "West"),
            (300, "Northwest"),
            (336, "North"),
            (360, "North"),
        ],
    )
    def test_sectors(self, deg, expected):
        assert get_wind_direction(deg) == expected

    @pytest.mark.parametrize("deg", [400, 361, -1])
    def test_out_of_range_has_no_direction(self, deg):
        assert get_wind_direction(deg) is None


class TestWeatherReport:
    def test_from_json(self):
        report = WeatherReport.from_json(PAYLOAD)
        assert report.location == "London, GB"
        assert report.url == "https://openweathermap.org/city/2643743"
        assert report.condition == "Clouds"
        assert report.cloudiness == 90
        assert report.timezone == 3600

    def test_optional_sections_may_be_missing(self):
        payload = {"id": 1, "name": "Nowhere", "main": {"temp": 20, "humidity": 50, "pressure": 1000}}
        report = WeatherReport.from_json(payload)
        assert report.location == "Nowhere"
        assert report.condition is None
        assert report.sunrise is None
        assert report.timezone is None
        assert report.wind_speed is None
        assert report.wind_deg is None


class TestWeatherEmbed:
    def test_fields(self):
        now = datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
        embed = build_weather_embed(WeatherReport.from_json(PAYLOAD), icon_url="https://icon", now=now)

        assert embed.author.name == "London, GB"
        assert embed.author.url == "https://openweathermap.org/city/2643743"
        assert embed.footer.text == "Provided by OpenWeather"

        fields = field_map(embed)
        assert fields["Condition"] == "Clouds"
        assert fields["Temperature"] == "-3°C/25°F"
        assert fields["Wind"] == "5 m/s, Northeast"
        assert fields["Humidity"] == "81%"
        assert fields["Cloudiness"] == "90%"
        assert fields["Pressure"] == "1,013 mbar"
        assert fields["Sunrise"] == "11:13 PM"
        assert fields["Sunset"] == "07:33 AM"
        assert fields["Current Date"] == "Jan 02, 2024, 04:04:05 PM (UTC+01:00)"

        assert embed.fields[-1].name == "Current Date"
        assert embed.fields[-1].inline is False

    def test_without_timezone_skips_local_times(self):
        payload = dict(PAYLOAD, timezone=None)
        fields = field_map(build_weather_embed(WeatherReport.from_json(payload)))
        assert "Sunrise" not in fields
        assert "Current Date" not in fields

    def test_wind_out_of_range_omits_direction(self):
        payload = dict(PAYLOAD, wind={"speed": 1.2, "deg": 400})
        assert field_map(build_weather_embed(WeatherReport.from_json(payload)))["Wind"] == "1 m/s"

    def test_missing_wind_omits_field(self):
        payload = {key: value for key, value in PAYLOAD.items() if key != "wind"}
        fields = field_map(build_weather_embed(WeatherReport.from_json(payload)))
        assert "Wind" not in fields
        assert fields["Humidity"] == "81%"

    def test_wind_without_bearing_shows_speed_only(self):
        payload = dict(PAYLOAD, wind={"speed": 3.4})
        assert field_map(build_weather_embed(WeatherReport.from_json(payload)))["Wind"] == "3 m/s"

    def test_utc_offsets(self):
        assert format_utc_offset(0) == "+00:00"
        assert format_utc_offset(19800) == "+05:30"
        assert format_utc_offset(-18000) == "-05:00"


def _session(status=200, payload=None, error=None):
    response = MagicMock()
    response.status = status

    async def json():
        return payload

    response.json = json

    session = MagicMock()
    session.closed = False
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value.__aenter__.return_value = response
    return session


class TestWeatherClient:
    @pytest.mark.asyncio
    async def test_get_by_city(self):
        session = _session(payload=PAYLOAD)
        client = WeatherClient("key", session=session)

        report = await client.get_by_city("London")

        assert report.name == "London"
        args, kwargs = session.get.call_args
        assert args == (OPENWEATHER_URL,)
        assert kwargs["params"] == {"q": "London", "appid": "key", "units": "metric"}

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = WeatherClient("key", session=_session(status=404, payload={"cod": "404"}))
        with pytest.raises(LocationNotFoundError):
            await client.get_by_city("Atlantis")

    @pytest.mark.asyncio
    async def test_transport_error_is_not_found(self):
        client = WeatherClient("key", session=_session(error=aiohttp.ClientConnectionError("down")))
        with pytest.raises(LocationNotFoundError):
            await client.get_by_city("London")

    @pytest.mark.asyncio
    async def test_malformed_payload_is_not_found(self):
        client = WeatherClient("key", session=_session(payload={"unexpected": True}))
        with pytest.raises(LocationNotFoundError):
            await client.get_by_city("London")

    @pytest.mark.asyncio
    async def test_close_leaves_injected_session_alone(self):
        session = _session(payload=PAYLOAD)
        await WeatherClient("key", session=session).close()
        session.close.assert_not_called()


class TestWeatherCommand:
    @pytest.mark.asyncio
    async def test_joins_arguments_into_query(self, handler, weather_client, make_message, channel):
        weather_client.get_by_city.return_value = WeatherReport.from_json(PAYLOAD)

        await handler.handle(make_message("<weather New York"))

        weather_client.get_by_city.assert_awaited_once_with("New York")
        embed = sent_embeds(channel)[0]
        assert embed.author.name == "London, GB"
        assert embed.author.icon_url == "https://cdn.example/avatar.png"

    @pytest.mark.asyncio
    async def test_no_arguments(self, handler, weather_client, make_message, channel):
        await handler.handle(make_message("<weather"))

        weather_client.get_by_city.assert_not_called()
        embed = sent_embeds(channel)[0]
        assert embed.author.name == "Failure!"
        assert embed.description == "You have provided no arguments!"

    @pytest.mark.asyncio
    async def test_unknown_location(self, handler, weather_client, make_message, channel):
        weather_client.get_by_city.side_effect = LocationNotFoundError()

        await handler.handle(make_message("<weather Atlantis"))

        assert sent_embeds(channel)[0].description == "No location has been found by the query!"
