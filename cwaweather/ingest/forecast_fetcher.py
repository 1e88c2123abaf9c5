"""Forecast fetcher: resolves a location, calls CWA, reshapes the payload."""

import logging

from cwaweather.ingest.cwa_client import CwaClient
from cwaweather.ingest.forecast_transformer import transform_forecast
from cwaweather.ingest.location_resolver import dataset_id_for
from cwaweather.models.forecast import ForecastResult

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, cwa_client: CwaClient):
        self.cwa = cwa_client

    def fetch(self, location_name: str) -> ForecastResult:
        """Fetch and reshape the forecast for an already-resolved location.

        Errors from the client and transformer propagate unchanged.
        """
        dataset_id = dataset_id_for(location_name)
        logger.debug("Fetching %s (dataset=%s)", location_name, dataset_id)
        raw = self.cwa.get_forecast(dataset_id)
        return transform_forecast(raw, location_name)
