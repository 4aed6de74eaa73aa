import logging
from collections.abc import Callable
from types import TracebackType
from typing import Any, Self

import httpx

from pitch_intel.domain.errors import FeedError
from pitch_intel.domain.pitch import Game
from pitch_intel.domain.result import Err, Ok
from pitch_intel.ingest._retry import default_http_retry
from pitch_intel.ingest.live_feed_parser import parse_live_feed

logger = logging.getLogger(__name__)

DEFAULT_FEED_URL_TEMPLATE = "https://statsapi.mlb.com/api/v1.1/game/{game_pk}/feed/live"

_DEFAULT_RETRY = default_http_retry("MLB live feed request")


class MLBLiveFeedSource:
    def __init__(
        self,
        client: httpx.Client | None = None,
        retry: Callable[[Callable[..., Any]], Callable[..., Any]] = _DEFAULT_RETRY,
        url_template: str = DEFAULT_FEED_URL_TEMPLATE,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout, connect=5.0))
        self._url_template = url_template
        self._fetch_with_retry = retry(self._do_fetch)

    @property
    def source_type(self) -> str:
        return "mlb_api"

    @property
    def source_detail(self) -> str:
        return "live_feed"

    def close(self) -> None:
        """Close the HTTP client if this source created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def url_for(self, game_pk: int) -> str:
        return self._url_template.format(game_pk=game_pk)

    def _do_fetch(self, url: str) -> httpx.Response:
        response = self._client.get(url)
        response.raise_for_status()
        return response

    def fetch(self, game_pk: int) -> Ok[Game] | Err[FeedError]:
        """Fetch and parse one live-feed snapshot; failures come back as ``Err``."""
        url = self.url_for(game_pk)
        logger.debug("GET %s", url)
        try:
            response = self._fetch_with_retry(url)
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Live feed fetch failed for game %d: %s", game_pk, exc)
            return Err(FeedError(message=str(exc), game_pk=game_pk, source_detail=self.source_detail))
        logger.debug("Live feed responded %d", response.status_code)
        if not isinstance(data, dict):
            logger.error("Live feed for game %d returned %s, expected an object", game_pk, type(data).__name__)
            return Err(FeedError(message="unexpected payload", game_pk=game_pk, source_detail=self.source_detail))
        return Ok(parse_live_feed(data))
