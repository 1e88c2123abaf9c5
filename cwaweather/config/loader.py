"""YAML config loader with environment and .env overrides."""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from cwaweather.config.schema import ProxyConfig

# env var -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "CWA_API_KEY": ("cwa", "api_key"),
    "PORT": ("server", "port"),
    "APP_ENV": ("server", "environment"),
}


def load_dotenv_file() -> None:
    """Load ``.env`` from the working directory without clobbering real env vars."""
    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(dotenv_path=cwd_env, override=False)


def load_config(path: str | Path | None = None) -> ProxyConfig:
    """Load and validate config.

    Values come from the optional YAML file, then from environment
    variables (``CWA_API_KEY``, ``PORT``, ``APP_ENV``), which win.
    """
    load_dotenv_file()

    raw: dict[str, Any] = {}
    if path is not None:
        with open(Path(path), encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            raw.setdefault(section, {})[key] = value

    return ProxyConfig(**raw)


def redacted(config: ProxyConfig) -> ProxyConfig:
    """Return a copy safe for display, with the API key masked."""
    key = config.cwa.api_key
    masked = f"{key[:4]}****" if len(key) > 4 else ("****" if key else "")
    return config.model_copy(
        update={"cwa": config.cwa.model_copy(update={"api_key": masked})}
    )
