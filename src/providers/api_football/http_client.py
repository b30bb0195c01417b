from __future__ import annotations

import asyncio
import random
import time
from typing import Any, Dict, Optional

import httpx

from core.config import Settings, get_settings
from core.logging import get_logger
from .exceptions import (
    HttpStatusError,
    InvalidResponseError,
    ProviderError,
    RateLimitError,
    TransientAPIError,
)

log = get_logger(__name__)

_BASE_URL = "https://v3.football.api-sports.io"

# Punto di aggancio per i test (evita attese reali nei retry)
_sleep = asyncio.sleep


class APIFootballHttpClient:
    """
    Client HTTP asincrono con retry e backoff per API Football (httpx.AsyncClient).
    Gestisce rate limit (429), errori transitori (5xx, network) e ritorna JSON.
    Ogni fallimento è una sottoclasse di TransportError.

    Telemetria minima (ultima chiamata conclusa):
      - _last_attempts: numero di tentativi effettuati
      - _last_retries: retries (attempts - 1)
      - _last_latency_ms: durata totale in millisecondi
      - _last_status: ultimo HTTP status code ricevuto (se nessuna risposta -> None)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._headers = {
            "x-apisports-key": self._settings.api_football_key,
            "Accept": "application/json",
        }
        self._max_attempts = self._settings.api_football_max_attempts
        self._base = self._settings.api_football_backoff_base
        self._factor = self._settings.api_football_backoff_factor
        self._jitter = self._settings.api_football_backoff_jitter
        self._timeout = self._settings.api_football_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        self._last_attempts: int = 0
        self._last_retries: int = 0
        self._last_latency_ms: float = 0.0
        self._last_status: Optional[int] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=_BASE_URL,
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "APIFootballHttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _compute_delay(self, attempt: int) -> float:
        # attempt parte da 1
        delay = self._base * (self._factor ** (attempt - 1))
        if self._jitter > 0:
            mult = random.uniform(1 - self._jitter, 1 + self._jitter)
            delay *= mult
        return delay

    def _record(self, attempt: int, start: float, status: Optional[int]) -> None:
        self._last_attempts = attempt
        self._last_retries = attempt - 1
        self._last_latency_ms = (time.perf_counter() - start) * 1000
        self._last_status = status

    async def api_get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        log.debug("api_football GET %s params=%s", path, params)
        client = self._get_client()
        start_overall = time.perf_counter()
        last_status: Optional[int] = None

        for attempt in range(1, self._max_attempts + 1):
            try:
                resp = await client.get(path, params=params)
            except (httpx.TimeoutException, httpx.TransportError) as e:
                reason = f"network:{e.__class__.__name__}"
                if attempt == self._max_attempts:
                    self._record(attempt, start_overall, None)
                    raise TransientAPIError(
                        f"Errore di rete persistente dopo {attempt} tentativi: {e}"
                    ) from e
                wait = self._compute_delay(attempt)
                log.warning("retry attempt=%s wait=%.2fs reason=%s", attempt, wait, reason)
                await _sleep(wait)
                continue

            last_status = resp.status_code

            # Successo
            if 200 <= resp.status_code < 300:
                self._record(attempt, start_overall, last_status)
                try:
                    data = resp.json()
                except ValueError as e:
                    raise InvalidResponseError(
                        f"Risposta non valida (non JSON) status={resp.status_code}"
                    ) from e
                if not isinstance(data, dict):
                    raise InvalidResponseError(
                        f"Risposta non valida (atteso oggetto JSON) path={path}"
                    )
                errors = data.get("errors")
                if errors:
                    raise ProviderError(f"API-Football errors path={path}: {errors}")
                log.debug("OK %s %s %.1fms", path, resp.status_code, self._last_latency_ms)
                return data

            # Rate limit 429
            if resp.status_code == 429:
                if attempt == self._max_attempts:
                    self._record(attempt, start_overall, last_status)
                    raise RateLimitError(f"Rate limit dopo {attempt} tentativi (429).")
                computed = self._compute_delay(attempt)
                retry_after_header = resp.headers.get("Retry-After")
                wait = computed
                if retry_after_header:
                    try:
                        wait = max(computed, float(retry_after_header))
                    except ValueError:
                        wait = computed
                log.warning("retry attempt=%s wait=%.2fs reason=rate_limit", attempt, wait)
                await _sleep(wait)
                continue

            # Errori transitori server
            if resp.status_code in (500, 502, 503, 504):
                if attempt == self._max_attempts:
                    self._record(attempt, start_overall, last_status)
                    raise TransientAPIError(
                        f"Status {resp.status_code} persistente dopo {attempt} tentativi."
                    )
                wait = self._compute_delay(attempt)
                log.warning(
                    "retry attempt=%s wait=%.2fs reason=http_%s",
                    attempt,
                    wait,
                    resp.status_code,
                )
                await _sleep(wait)
                continue

            # 4xx e altri codici: non retriable
            self._record(attempt, start_overall, last_status)
            log.error("Status %s %s body=%s", resp.status_code, path, resp.text[:300])
            raise HttpStatusError(
                resp.status_code,
                f"Richiesta API fallita (status={resp.status_code}) non retriable path={path}",
            )

        # Non dovrebbe mai arrivare qui
        self._record(self._max_attempts, start_overall, last_status)
        raise TransientAPIError(f"Fallimento imprevisto path={path} last_status={last_status}")

    def get_stats(self) -> Dict[str, Any]:
        """
        Ritorna telemetria dell'ultima chiamata:
          attempts: tentativi totali
          retries: tentativi falliti (attempts - 1)
          latency_ms: durata complessiva
          last_status: ultimo status code visto (None se mai ricevuta risposta)
        """
        return {
            "attempts": self._last_attempts,
            "retries": self._last_retries,
            "latency_ms": round(self._last_latency_ms, 2),
            "last_status": self._last_status,
        }


def get_http_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> APIFootballHttpClient:
    """
    Restituisce sempre una nuova istanza per far sì che i test che
    modificano le variabili d'ambiente abbiano effetto immediato.
    """
    return APIFootballHttpClient(transport=transport)
