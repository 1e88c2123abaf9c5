"""CWA weather proxy — FastAPI app exposing reshaped one-week forecasts."""

import logging

import httpx
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cwaweather.config.defaults import VALID_LOCATIONS
from cwaweather.config.schema import ProxyConfig
from cwaweather.ingest.cwa_client import CwaApiError, CwaClient, MissingApiKeyError
from cwaweather.ingest.forecast_fetcher import ForecastFetcher
from cwaweather.ingest.forecast_transformer import ForecastNotFoundError
from cwaweather.ingest.location_resolver import resolve_location
from cwaweather.models.common import utc_now_iso

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "weather": "/api/weather?locationName=縣市名稱",
    "weatherByPath": "/api/weather/:locationName",
    "locations": "/api/locations",
    "health": "/api/health",
}


def _missing_key_response() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "伺服器設定錯誤",
            "message": "請在 .env 檔案中設定 CWA_API_KEY",
        },
    )


def create_app(config: ProxyConfig, fetcher: ForecastFetcher | None = None) -> FastAPI:
    """Build the proxy app. ``fetcher`` is injectable for tests."""
    if fetcher is None:
        fetcher = ForecastFetcher(
            CwaClient(
                api_key=config.cwa.api_key,
                base_url=config.cwa.base_url,
                timeout=config.cwa.timeout_seconds,
            )
        )

    app = FastAPI(title="CWA Weather Proxy", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error handlers ──────────────────────────────────────────────

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods both read as "no such route".
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content={"error": "找不到此路徑"})
        return JSONResponse(
            status_code=exc.status_code, content={"error": str(exc.detail)}
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "伺服器錯誤", "message": str(exc)},
        )

    # ── Info endpoints ──────────────────────────────────────────────

    @app.get("/")
    def index():
        return {
            "message": "歡迎使用 CWA 天氣預報 API",
            "endpoints": ENDPOINTS,
            "defaultLocation": config.default_location,
            "validLocations": list(VALID_LOCATIONS),
        }

    @app.get("/api/health")
    def health():
        return {"status": "OK", "timestamp": utc_now_iso()}

    @app.get("/api/locations")
    def locations():
        return {
            "success": True,
            "data": {
                "locations": list(VALID_LOCATIONS),
                "default": config.default_location,
            },
        }

    # ── Forecast endpoints ──────────────────────────────────────────

    def weather_response(requested: str | None) -> JSONResponse:
        if not config.cwa.api_key:
            return _missing_key_response()

        location_name = resolve_location(requested, config.default_location)
        try:
            result = fetcher.fetch(location_name)
        except MissingApiKeyError:
            return _missing_key_response()
        except ForecastNotFoundError as e:
            return JSONResponse(
                status_code=404,
                content={"error": "查無資料", "message": str(e)},
            )
        except CwaApiError as e:
            return JSONResponse(
                status_code=e.status_code,
                content={
                    "error": "CWA API 錯誤",
                    "message": e.message,
                    "details": e.body,
                },
            )
        except httpx.RequestError as e:
            logger.error("Failed to fetch weather for %s: %s", location_name, e)
            return JSONResponse(
                status_code=500,
                content={
                    "error": "伺服器錯誤",
                    "message": "無法取得天氣資料，請稍後再試",
                    "debug": str(e),
                },
            )
        except Exception as e:
            # Returned from the endpoint so CORS headers still apply.
            logger.exception("Unexpected error fetching weather for %s", location_name)
            return JSONResponse(
                status_code=500,
                content={"error": "伺服器錯誤", "message": str(e)},
            )

        return JSONResponse(content={"success": True, "data": result.to_dict()})

    @app.get("/api/weather")
    def weather(location_name: str | None = Query(default=None, alias="locationName")):
        return weather_response(location_name)

    @app.get("/api/weather/{path_location}")
    def weather_by_path(
        path_location: str,
        location_name: str | None = Query(default=None, alias="locationName"),
    ):
        # Query string wins over the path segment.
        return weather_response(location_name or path_location)

    return app
