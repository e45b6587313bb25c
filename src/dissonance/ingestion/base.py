"""Provider connector base - request URL building, fetch boundary, record parsing helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError

from dissonance.models import Market

log = structlog.get_logger(__name__)


def to_float(value: Any, default: float | None = None) -> float | None:
    """Parse a number that may arrive as str/int/float. Unparseable -> default."""
    if value is None:
        return default
    try:
        f = float(value)
    except (TypeError, ValueError):
        return default
    if f != f:  # NaN
        return default
    return f


def build_market(**fields: Any) -> Market | None:
    """Construct a Market, returning None (and logging) when the record is malformed."""
    try:
        return Market(**fields)
    except ValidationError as e:
        log.warning("skip_market", market_id=fields.get("id"), errors=e.error_count())
        return None


def relay_url(target: str, relay_prefix: str = "") -> str:
    """Route target through a CORS-style relay: prefix + percent-encoded target."""
    if not relay_prefix:
        return target
    return relay_prefix + quote(target, safe="!~*'()")


class ProviderConnector(ABC):
    """One data provider: where to fetch, and how to turn its payload into Markets.

    ``fetch_markets`` is the fetch boundary: transport, HTTP status and JSON
    errors are logged and reduced to an empty list so one provider outage
    never aborts a cycle.
    """

    source: str = ""

    def __init__(
        self,
        api_url: str,
        limit: int = 50,
        relay_prefix: str = "",
    ) -> None:
        self.api_url = api_url
        self.limit = limit
        self.relay_prefix = relay_prefix

    def query_params(self) -> dict[str, Any]:
        return {}

    def request_url(self) -> str:
        target = str(httpx.URL(self.api_url, params=self.query_params() or None))
        return relay_url(target, self.relay_prefix)

    @abstractmethod
    def normalize(self, payload: Any) -> list[Market]:
        """Convert the provider's raw payload into canonical Markets."""
        ...

    async def fetch_payload(self, client: httpx.AsyncClient) -> Any:
        url = self.request_url()
        log.debug("provider_request", source=self.source, url=url)
        resp = await client.get(url)
        resp.raise_for_status()
        return resp.json()

    async def fetch_markets(self, client: httpx.AsyncClient) -> list[Market]:
        try:
            payload = await self.fetch_payload(client)
            markets = self.normalize(payload)
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            log.warning("provider_fetch_failed", source=self.source, error=str(e))
            return []
        log.info("provider_fetched", source=self.source, markets=len(markets))
        return markets
