"""
Fan-out Fetcher: one RawDataBundle per invocation.

Behavioral Contract:
- Every registered source is fetched concurrently over one shared client
- Each fetch is bounded by its own timeout; expiry cancels the request
- Failures (timeout, network, non-2xx, malformed payload) are absorbed:
  logged, then replaced by the source's fallback or None
- The bundle always has exactly one entry per source; fetch_all never raises
- No retries
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Tuple

import httpx
from pydantic import BaseModel, ValidationError

from zeitgeist.context.selector import DailyContext, DailyContextSelector
from zeitgeist.models.sources import RawDataBundle, SourceOutcome, SourceStatus
from zeitgeist.sources.http import SourceFetchError
from zeitgeist.sources.registry import SourceDescriptor, SourceRegistry

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], httpx.AsyncClient]

MALFORMED_ERRORS = (ValidationError, ValueError, KeyError, TypeError, IndexError, AttributeError)


def default_client_factory(user_agent: str = "zeitgeist-pet/0.1") -> ClientFactory:
    def factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            follow_redirects=True,
        )
    return factory


class FanoutFetcher:
    """Settle-all fetch across the source registry."""

    def __init__(
        self,
        registry: SourceRegistry,
        selector: Optional[DailyContextSelector] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        self.registry = registry
        self.selector = selector or DailyContextSelector()
        self.client_factory = client_factory or default_client_factory()

    async def fetch_all(self, current_time: Optional[datetime] = None) -> RawDataBundle:
        """Fetch every source and assemble the cycle's bundle."""
        if current_time is None:
            current_time = datetime.now(timezone.utc)
        ctx = self.selector.context_for(current_time)

        started = time.monotonic()
        async with self.client_factory() as client:
            settled = await asyncio.gather(
                *(self._settle(descriptor, client, ctx) for descriptor in self.registry)
            )

        entries = {}
        outcomes = {}
        for descriptor, (value, outcome) in zip(self.registry, settled):
            entries[descriptor.id] = value
            outcomes[descriptor.id] = outcome

        bundle = RawDataBundle(
            entries=entries,
            outcomes=outcomes,
            city=ctx.city,
            fetched_at=current_time,
        )
        logger.info(
            "Fetched %d sources for %s in %.0f ms (%d degraded)",
            len(entries),
            ctx.city.name,
            (time.monotonic() - started) * 1000,
            len(bundle.failed_sources),
        )
        return bundle

    async def _settle(
        self,
        descriptor: SourceDescriptor,
        client: httpx.AsyncClient,
        ctx: DailyContext,
    ) -> Tuple[Optional[Any], SourceOutcome]:
        """Run one fetch to completion. Never raises."""
        started = time.monotonic()
        try:
            value = await asyncio.wait_for(
                descriptor.fetch(client, ctx),
                timeout=descriptor.timeout_seconds,
            )
            if not isinstance(value, descriptor.result_model):
                raise SourceFetchError(
                    descriptor.id,
                    f"expected {descriptor.result_model.__name__}, got {type(value).__name__}",
                )
            return value, SourceOutcome(
                status=SourceStatus.OK,
                elapsed_ms=(time.monotonic() - started) * 1000,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            error = f"timed out after {descriptor.timeout_ms} ms"
        except httpx.HTTPStatusError as e:
            error = f"HTTP {e.response.status_code}"
        except httpx.HTTPError as e:
            error = f"network error: {e.__class__.__name__}"
        except SourceFetchError as e:
            error = e.reason
        except MALFORMED_ERRORS as e:
            error = f"malformed payload: {e.__class__.__name__}"
        except Exception as e:
            logger.exception("Unexpected failure in source %s", descriptor.id)
            error = f"unexpected error: {e.__class__.__name__}"

        return self._degrade(descriptor, ctx, error, started)

    def _degrade(
        self,
        descriptor: SourceDescriptor,
        ctx: DailyContext,
        error: str,
        started: float,
    ) -> Tuple[Optional[BaseModel], SourceOutcome]:
        elapsed_ms = (time.monotonic() - started) * 1000
        fallback = descriptor.resolve_fallback(ctx)
        if fallback is None:
            logger.warning("Source %s failed (%s); no fallback", descriptor.id, error)
            status = SourceStatus.FAILED
        else:
            logger.warning("Source %s failed (%s); using fallback", descriptor.id, error)
            status = SourceStatus.FALLBACK
        return fallback, SourceOutcome(status=status, error=error, elapsed_ms=elapsed_ms)
