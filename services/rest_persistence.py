"""
Persistence Service over a hosted PostgREST table API (the Supabase REST
interface).

A fresh httpx client is opened per call, so the service can be used from
any event loop (Streamlit reruns start a new one each time).
"""

from typing import Any, Dict, List, Optional
import os
import logging
import httpx
from dotenv import load_dotenv

from services.persistence import PersistenceError, PersistenceService, Row, check_table

load_dotenv()

logger = logging.getLogger(__name__)

SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")
REST_TIMEOUT = float(os.getenv("REST_TIMEOUT", "30") or 30)


class RestPersistenceService(PersistenceService):
    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = REST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        base_url = base_url if base_url is not None else SUPABASE_URL
        api_key = api_key if api_key is not None else SUPABASE_KEY
        if not base_url or not api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set for the REST backend.")
        self.base_url = base_url.rstrip("/") + "/rest/v1"
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _request(self, method: str, table: str, **kwargs) -> List[Row]:
        try:
            async with self._client() as client:
                response = await client.request(method, f"/{table}", **kwargs)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as http_err:
            logger.error(f"HTTP error on {method} {table}: {http_err} - {http_err.response.text}")
            raise PersistenceError(f"{method} {table} failed with status {http_err.response.status_code}", cause=http_err) from http_err
        except httpx.HTTPError as exc:
            raise PersistenceError(f"{method} {table} failed: {exc}", cause=exc) from exc
        except ValueError as exc:
            raise PersistenceError(f"{method} {table} returned invalid JSON", cause=exc) from exc

        if not isinstance(data, list):
            raise PersistenceError(f"{method} {table} returned {type(data).__name__}, expected a list of rows")
        return data

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Row]:
        check_table(table)
        params = {"select": "*"}
        for name, value in (filters or {}).items():
            params[name] = "is.null" if value is None else f"eq.{value}"
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        return await self._request("GET", table, params=params)

    async def insert(self, table: str, rows: List[Row]) -> List[Row]:
        check_table(table)
        return await self._request(
            "POST",
            table,
            json=rows,
            headers={"Prefer": "return=representation"},
        )
