"""
Utility Commands
weather
"""

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, List, Optional

import discord

from bot.config import SUCCESS_COLOR
from utils.error_handler import CommandError
from utils.text import format_number
from utils.weather import WeatherReport, get_wind_direction

if TYPE_CHECKING:
    from commands.command_handler import CommandHandler

DEGREE = "°"


def format_utc_offset(offset_secs: int) -> str:
    """+HH:MM form of a UTC offset in seconds."""
    sign = "-" if offset_secs < 0 else "+"
    hours, remainder = divmod(abs(offset_secs), 3600)
    return f"{sign}{hours:02d}:{remainder // 60:02d}"


def local_time(timestamp: int, tz: timezone) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone(tz)


def build_weather_embed(
    report: WeatherReport,
    icon_url: Optional[str] = None,
    now: Optional[datetime] = None,
) -> discord.Embed:
    """
    Render a weather report.

    Args:
        report: Parsed report
        icon_url: Avatar shown next to the location
        now: Current UTC time, defaults to the clock
    """
    embed = discord.Embed(color=SUCCESS_COLOR)
    embed.set_author(name=report.location, url=report.url, icon_url=icon_url)
    embed.set_footer(text="Provided by OpenWeather")

    if report.condition:
        embed.add_field(name="Condition", value=report.condition, inline=True)

    temperature = f"{int(report.temperature)}{DEGREE}C/{int(report.temperature_fahrenheit)}{DEGREE}F"
    embed.add_field(name="Temperature", value=temperature, inline=True)

    if report.wind_speed is not None:
        wind = f"{round(report.wind_speed)} m/s"
        direction = get_wind_direction(report.wind_deg) if report.wind_deg is not None else None
        if direction:
            wind += f", {direction}"
        embed.add_field(name="Wind", value=wind, inline=True)

    embed.add_field(name="Humidity", value=f"{int(report.humidity)}%", inline=True)

    if report.cloudiness is not None:
        embed.add_field(name="Cloudiness", value=f"{report.cloudiness}%", inline=True)

    embed.add_field(name="Pressure", value=f"{format_number(int(report.pressure))} mbar", inline=True)

    if report.timezone is not None:
        tz = timezone(timedelta(seconds=report.timezone))

        if report.sunrise is not None:
            embed.add_field(name="Sunrise", value=local_time(report.sunrise, tz).strftime("%I:%M %p"), inline=True)
        if report.sunset is not None:
            embed.add_field(name="Sunset", value=local_time(report.sunset, tz).strftime("%I:%M %p"), inline=True)

        current = (now or datetime.now(timezone.utc)).astimezone(tz)
        formatted = current.strftime("%b %d, %Y, %I:%M:%S %p")
        embed.add_field(
            name="Current Date",
            value=f"{formatted} (UTC{format_utc_offset(report.timezone)})",
            inline=False,
        )

    return embed


async def cmd_weather(message: Any, args: List[str], handler: "CommandHandler") -> None:
    """Handle the weather command."""
    if not args:
        raise CommandError("You have provided no arguments!")

    # LocationNotFoundError propagates to the handler
    report = await handler.weather_client.get_by_city(" ".join(args))

    bot_user = handler.client.user
    icon_url = bot_user.display_avatar.url if bot_user else None

    await message.channel.send(embed=build_weather_embed(report, icon_url=icon_url))
