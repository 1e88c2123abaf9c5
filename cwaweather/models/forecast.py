"""Reshaped CWA forecast models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ForecastPeriod:
    start_time: str
    end_time: str
    weather: str = ""
    weather_code: str = ""
    rain: str = ""  # 3h probability of precipitation, e.g. "20%"
    temperature: str = ""
    apparent_temp: str = ""
    comfort: str = ""
    wind_direction: str = ""
    wind_speed: str = ""
    humidity: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "weather": self.weather,
            "weatherCode": self.weather_code,
            "rain": self.rain,
            "temperature": self.temperature,
            "apparentTemp": self.apparent_temp,
            "comfort": self.comfort,
            "windDirection": self.wind_direction,
            "windSpeed": self.wind_speed,
            "humidity": self.humidity,
            "description": self.description,
        }


@dataclass(frozen=True)
class ForecastResult:
    city: str
    district: str
    update_time: str
    forecasts: list[ForecastPeriod] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "city": self.city,
            "district": self.district,
            "updateTime": self.update_time,
            "forecasts": [p.to_dict() for p in self.forecasts],
        }
