"""
GoWinston client for the plagiarism gateway
Handles communication with the upstream plagiarism-detection API
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from .errors import (
    ConnectivityError,
    RequestSetupError,
    error_for_status,
)
from .validators import url_hostname

PREVIEW_CHARS = 200


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-15T14:30:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def truncate(text: str, limit: int = PREVIEW_CHARS) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def text_stats(text: str) -> Dict[str, Any]:
    """Length, whitespace-delimited word count, line count and a short preview"""
    return {
        "length": len(text),
        "wordCount": len(text.split()),
        "lineCount": len(text.split("\n")),
        "preview": truncate(text),
    }


def _error_detail(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class PlagiarismClient:
    def __init__(
        self,
        api_url: str,
        api_token: str,
        language: str = "en",
        country: str = "us",
        text_timeout: float = 45.0,
        url_timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client; `transport` lets tests swap in httpx.MockTransport"""
        self.api_url = (api_url or "").strip()
        self.api_token = api_token or ""
        self.language = language
        self.country = country
        self.text_timeout = text_timeout
        self.url_timeout = url_timeout
        self._http = httpx.AsyncClient(transport=transport, follow_redirects=True)

        if not self.api_url or not self.api_token:
            logger.warning(
                f"GoWinston not configured: url={self.api_url!r} "
                f"token={'SET' if self.api_token else 'MISSING'}"
            )

    @property
    def configured(self) -> bool:
        return bool(self.api_token)

    async def _post(self, payload: Dict[str, Any], timeout: float) -> Any:
        """
        POST a payload to the upstream API

        Returns:
            Upstream JSON body (or raw text if the body is not JSON)

        Raises:
            PlagiarismCheckError subclass describing the failure
        """
        if not self.api_url:
            raise RequestSetupError("GOWINSTON_API_URL is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }

        try:
            # httpx applies `timeout` per phase; wait_for bounds the whole exchange
            response = await asyncio.wait_for(
                self._http.post(self.api_url, json=payload, headers=headers, timeout=timeout),
                timeout,
            )
            response.raise_for_status()
        except asyncio.TimeoutError as e:
            logger.warning(f"GoWinston did not answer within {timeout}s")
            raise ConnectivityError() from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"GoWinston returned {status}: {e.response.text[:800]}")
            raise error_for_status(status, _error_detail(e.response)) from e
        except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
            raise RequestSetupError(str(e)) from e
        except httpx.RequestError as e:
            logger.warning(f"Network error communicating with GoWinston: {e!r}")
            raise ConnectivityError() from e

        try:
            return response.json()
        except ValueError:
            return response.text

    async def check_text(self, text: str) -> Dict[str, Any]:
        """
        Submit free text for a plagiarism check

        Args:
            text: Trimmed input text

        Returns:
            Upstream result plus local text statistics
        """
        payload = {"language": self.language, "country": self.country, "text": text}
        result = await self._post(payload, self.text_timeout)

        return {
            "plagiarismResult": result,
            "textStats": text_stats(text),
            "processedAt": utc_timestamp(),
        }

    async def check_url(self, url: str) -> Dict[str, Any]:
        """
        Submit a URL; upstream fetches and checks the page

        Args:
            url: Absolute URL

        Returns:
            Upstream result plus the URL's hostname
        """
        payload = {"language": self.language, "country": self.country, "file": url}
        result = await self._post(payload, self.url_timeout)

        return {
            "plagiarismResult": result,
            "inputUrl": url,
            "domain": url_hostname(url),
            "processedAt": utc_timestamp(),
        }

    async def aclose(self) -> None:
        await self._http.aclose()
