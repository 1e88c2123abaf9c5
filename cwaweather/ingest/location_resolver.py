"""Location allow-list resolution and dataset-id lookup."""

from cwaweather.config.defaults import (
    DEFAULT_LOCATION,
    LOCATION_DATASET_IDS,
    VALID_LOCATIONS,
)


def resolve_location(raw: str | None, default: str = DEFAULT_LOCATION) -> str:
    """Return ``raw`` if it is a supported location, else ``default``.

    Unknown or missing names are replaced silently; this never raises.
    Matching is exact (no trimming, no 台/臺 folding).
    """
    if not raw or raw not in VALID_LOCATIONS:
        return default
    return raw


def dataset_id_for(location_name: str) -> str:
    """Look up the F-D0047 dataset code. Raises KeyError for unknown names."""
    return LOCATION_DATASET_IDS[location_name]
