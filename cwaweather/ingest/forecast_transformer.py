"""Reshape a CWA F-D0047 payload into a flat, index-aligned forecast list.

The "天氣現象" (weather phenomenon) series is the master timeline: it sets
the number and order of periods. Every other element series is read by
position, and a series that is missing or shorter than the master yields
empty strings for the periods it does not cover.
"""

import logging
from typing import Any

from cwaweather.models.forecast import ForecastPeriod, ForecastResult

logger = logging.getLogger(__name__)

MASTER_ELEMENT = "天氣現象"

# (attribute, element name, ElementValue field, unit suffix)
ELEMENT_FIELDS: tuple[tuple[str, str, str, str], ...] = (
    ("temperature", "溫度", "Temperature", "°C"),
    ("apparent_temp", "體感溫度", "ApparentTemperature", "°C"),
    ("comfort", "舒適度指數", "ComfortIndex", ""),
    ("rain", "3小時降雨機率", "ProbabilityOfPrecipitation", "%"),
    ("wind_direction", "風向", "WindDirection", ""),
    ("wind_speed", "風速", "WindSpeed", " m/s"),
    ("humidity", "相對濕度", "RelativeHumidity", "%"),
    ("description", "天氣預報綜合描述", "WeatherDescription", ""),
)


class ForecastNotFoundError(LookupError):
    """Raised when the payload has no region/sub-location entry."""

    def __init__(self, location_name: str):
        self.location_name = location_name
        super().__init__(f"無法取得{location_name}天氣資料")


def transform_forecast(payload: dict, location_name: str) -> ForecastResult:
    """Build a ForecastResult for ``location_name`` from a raw CWA payload."""
    region = _first(_get(payload, "records", "Locations"))
    sub_location = _first(_get(region, "Location"))
    if sub_location is None:
        logger.warning("No forecast data in CWA payload for %s", location_name)
        raise ForecastNotFoundError(location_name)

    series = _element_series(sub_location)
    master = series.get(MASTER_ELEMENT) or []

    periods = [_build_period(i, entry, series) for i, entry in enumerate(master)]

    return ForecastResult(
        city=location_name,
        district=_text(sub_location.get("LocationName")),
        update_time=_text(region.get("DatasetDescription")),
        forecasts=periods,
    )


def _build_period(
    index: int, master_entry: dict, series: dict[str, list]
) -> ForecastPeriod:
    wx = _element_value(master_entry)
    values: dict[str, str] = {
        "weather": _text(wx.get("Weather")),
        "weather_code": _text(wx.get("WeatherCode")),
    }
    for attribute, element_name, field_name, suffix in ELEMENT_FIELDS:
        entry = _entry_at(series.get(element_name), index)
        if entry is None:
            continue
        values[attribute] = _with_suffix(_element_value(entry).get(field_name), suffix)

    return ForecastPeriod(
        start_time=_text(master_entry.get("StartTime")),
        end_time=_text(master_entry.get("EndTime")),
        **values,
    )


def _element_series(sub_location: dict) -> dict[str, list]:
    """Map ElementName -> Time list. Later duplicates win."""
    series: dict[str, list] = {}
    for element in sub_location.get("WeatherElement") or []:
        if not isinstance(element, dict):
            continue
        name = element.get("ElementName")
        times = element.get("Time")
        if name and isinstance(times, list):
            series[name] = times
    return series


def _entry_at(times: list | None, index: int) -> dict | None:
    if times is None or index >= len(times):
        return None
    entry = times[index]
    return entry if isinstance(entry, dict) else None


def _element_value(entry: dict) -> dict:
    """Unwrap exactly one level: ElementValue[0]."""
    wrapped = entry.get("ElementValue")
    if isinstance(wrapped, list) and wrapped and isinstance(wrapped[0], dict):
        return wrapped[0]
    return {}


def _with_suffix(value: Any, suffix: str) -> str:
    if value is None or value == "":
        return ""
    return f"{value}{suffix}"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _get(obj: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _first(items: Any) -> Any:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return None
