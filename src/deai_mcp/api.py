"""deai_mcp.api — HTTP client for the DeAI analytics API."""

import time
from typing import Optional
from urllib.parse import urlencode

from curl_cffi import requests as cffi_requests
from curl_cffi.requests.exceptions import RequestException, Timeout

from deai_mcp.config import API_KEY_HEADER, Settings, log
from deai_mcp.errors import UpstreamError


def _error_message(resp) -> str:
    """Pick the most useful message out of a non-2xx response body.

    A JSON body yields its ``message`` or ``error`` field, else "Unknown
    error".  The raw text is used only when the body is not JSON.
    """
    try:
        body = resp.json()
    except ValueError:
        return (resp.text or "").strip() or "Unknown error"
    if isinstance(body, dict):
        for key in ("message", "error"):
            if body.get(key):
                return str(body[key])
    return "Unknown error"


class DeAIClient:
    """Read-only client: one GET per call, no retries, no caching."""

    def __init__(self, api_key: str, settings: Optional[Settings] = None):
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self.settings = settings or Settings()

    @property
    def base_url(self) -> str:
        return self.settings.base_url.rstrip("/")

    def _headers(self) -> dict:
        return {
            API_KEY_HEADER: self._api_key,
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }

    def get(self, endpoint: str):
        """GET ``endpoint`` (path plus optional query) and return parsed JSON.

        Raises:
            UpstreamError: on non-2xx status, timeout, transport failure,
                or a 2xx body that is not JSON.
        """
        url = f"{self.base_url}{endpoint}"
        started = time.monotonic()
        log(f"HTTP GET {url}")
        try:
            resp = cffi_requests.get(
                url,
                headers=self._headers(),
                timeout=self.settings.timeout,
            )
        except Timeout:
            log(f"HTTP GET {url} timed out after {self.settings.timeout}s")
            raise UpstreamError(
                "Request timeout: API took too long to respond",
                is_timeout=True,
            ) from None
        except RequestException as exc:
            log(f"HTTP GET {url} failed: {exc}")
            raise UpstreamError(f"Request error: {exc}") from exc

        elapsed = time.monotonic() - started
        log(f"HTTP GET {url} -> {resp.status_code} ({elapsed:.2f}s)")

        if not 200 <= resp.status_code < 300:
            raise UpstreamError(
                f"API Error ({resp.status_code}): {_error_message(resp)}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Request error: invalid JSON in response ({exc})",
                status_code=resp.status_code,
            ) from exc

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def get_token_info(self, contract_address: str):
        return self.get(f"/api/token/token-info/{contract_address}")

    def get_top_holders(self, contract_address: str):
        return self.get(f"/api/token/top-holders/{contract_address}")

    def get_token_holder_balance_changes(self, contract_address: str):
        return self.get(f"/api/token/token-holder-balance-changes/{contract_address}")

    def get_portfolio(self, wallet_address: str):
        return self.get(f"/api/token/portfolio/{wallet_address}")

    def get_avg_entry_price(self, contract_address: str):
        return self.get(f"/api/token/avg-entry/{contract_address}")

    def get_two_token_overlap(self, token1: str, token2: str):
        query = urlencode({"token1": token1, "token2": token2})
        return self.get(f"/api/token/two-token-overlap?{query}")
