"""
Configuration management for the plagiarism gateway
Centralizes environment variable parsing and provides typed configuration
"""

import os
from dataclasses import dataclass, asdict
from typing import Any, Dict

from dotenv import load_dotenv


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Typed view over the environment"""

    # Upstream (GoWinston) API
    api_url: str = ""
    api_token: str = ""
    language: str = "en"
    country: str = "us"
    text_timeout: float = 45.0
    url_timeout: float = 60.0

    # Cache
    cache_ttl_seconds: int = 600
    sweep_interval_seconds: int = 120

    # Rate limiting
    rate_limit_max: int = 20
    rate_limit_window_seconds: int = 900
    trust_proxy: bool = False

    # Input
    max_input_chars: int = 50_000

    # HTTP server
    route_prefix: str = ""
    host: str = "0.0.0.0"
    port: int = 5555
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from environment variables (and a .env file if present)"""
        if dotenv:
            load_dotenv()

        return cls(
            api_url=os.getenv("GOWINSTON_API_URL", "").strip(),
            api_token=os.getenv("GOWINSTON_API_TOKEN", "").strip(),
            language=os.getenv("PLAGIARISM_LANGUAGE", "en"),
            country=os.getenv("PLAGIARISM_COUNTRY", "us"),
            text_timeout=float(os.getenv("PLAGIARISM_TEXT_TIMEOUT", "45")),
            url_timeout=float(os.getenv("PLAGIARISM_URL_TIMEOUT", "60")),
            cache_ttl_seconds=int(os.getenv("CACHE_TTL_S", "600")),
            sweep_interval_seconds=int(os.getenv("CACHE_SWEEP_INTERVAL_S", "120")),
            rate_limit_max=int(os.getenv("RATE_LIMIT_MAX", "20")),
            rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_S", "900")),
            trust_proxy=_env_bool("TRUST_PROXY", "0"),
            max_input_chars=int(os.getenv("MAX_INPUT_CHARS", "50000")),
            route_prefix=os.getenv("ROUTE_PREFIX", "").rstrip("/"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5555")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def api_configured(self) -> bool:
        return bool(self.api_token)

    def safe_dict(self) -> Dict[str, Any]:
        """Settings as a dict with the API token masked, for startup logging"""
        data = asdict(self)
        data["api_token"] = "SET" if self.api_token else "MISSING"
        return data
