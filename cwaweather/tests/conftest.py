"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from cwaweather.config.schema import CwaConfig, ProxyConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def _time_entry(i: int, **value) -> dict:
    start = f"2026-10-{18 + i // 2:02d}T{'06' if i % 2 else '18'}:00:00+08:00"
    return {"StartTime": start, "EndTime": start, "ElementValue": [value]}


def build_payload(
    elements: dict[str, list[dict]], location: str = "臺北市", district: str = "中正區"
) -> dict:
    """Build a minimal CWA datastore payload.

    ``elements`` maps ElementName -> list of ElementValue dicts, one per period.
    """
    return {
        "success": "true",
        "records": {
            "Locations": [
                {
                    "DatasetDescription": "臺灣各縣市鄉鎮未來1週逐12小時天氣預報",
                    "LocationsName": location,
                    "Location": [
                        {
                            "LocationName": district,
                            "WeatherElement": [
                                {
                                    "ElementName": name,
                                    "Time": [_time_entry(i, **v) for i, v in enumerate(values)],
                                }
                                for name, values in elements.items()
                            ],
                        }
                    ],
                }
            ]
        },
    }


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURE_DIR


@pytest.fixture
def taipei_payload() -> dict:
    with open(FIXTURE_DIR / "cwa_forecast_taipei.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def short_temperature_payload() -> dict:
    """8 weather-phenomenon periods but only 5 temperature entries."""
    return build_payload({
        "天氣現象": [{"Weather": "晴", "WeatherCode": "01"} for _ in range(8)],
        "溫度": [{"Temperature": str(20 + i)} for i in range(5)],
        "相對濕度": [{"RelativeHumidity": "70"} for _ in range(8)],
    })


@pytest.fixture
def proxy_config() -> ProxyConfig:
    return ProxyConfig(
        cwa=CwaConfig(api_key="CWA-TEST-KEY", base_url="https://test-cwa.example.com/api")
    )


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear config env vars and run from an empty directory (no stray .env)."""
    for name in ("CWA_API_KEY", "PORT", "APP_ENV"):
        # setenv first so teardown also undoes values written by load_dotenv
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    data = {
        "cwa": {"timeout_seconds": 5.0},
        "server": {"port": 8080, "environment": "test"},
        "default_location": "臺北市",
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True)
    return path


@pytest.fixture
def payload_builder():
    return build_payload
