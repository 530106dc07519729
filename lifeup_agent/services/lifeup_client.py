"""LifeUp Cloud HTTP client (httpx async).

One instance per tool call::

    async with LifeUpClient(settings) as client:
        result = await client.get_tasks()

Every call returns an ``ApiResult`` (data XOR error); transport failures and
unsuccessful envelopes never raise.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from lifeup_agent.config import Settings
from lifeup_agent.services.error_classifier import (
    LifeUpError,
    classify_response,
    classify_transport_error,
    server_unreachable,
)

logger = logging.getLogger(__name__)

API_PATH = "/api"
HEALTH_PATH = "/"


@dataclass
class ApiResult:
    data: Any = None
    error: Optional[LifeUpError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LifeUpClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "LifeUpClient":
        if self._http is None:
            headers = {}
            if self.settings.LIFEUP_API_TOKEN:
                headers["Authorization"] = self.settings.LIFEUP_API_TOKEN
            self._http = httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=self.settings.LIFEUP_TIMEOUT,
                headers=headers,
                transport=self._transport,
            )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    async def health_check(self) -> bool:
        """Single probe: True iff GET / answers HTTP 200."""
        try:
            resp = await self._http.get(HEALTH_PATH)
        except httpx.HTTPError as exc:
            logger.debug("LifeUp health probe failed: %r", exc)
            return False
        return resp.status_code == 200

    async def ensure_healthy(self) -> Optional[LifeUpError]:
        """Probe with bounded retries; None when healthy, SERVER_UNREACHABLE otherwise."""
        attempts = 1 + max(self.settings.LIFEUP_HEALTH_RETRIES, 0)
        for attempt in range(attempts):
            if await self.health_check():
                return None
            logger.warning("LifeUp health check failed (attempt %d/%d)", attempt + 1, attempts)
            if attempt < attempts - 1:
                await asyncio.sleep(self.settings.LIFEUP_HEALTH_RETRY_DELAY)
        return server_unreachable(self.settings.LIFEUP_HOST, attempts)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, context: str, **kwargs) -> ApiResult:
        try:
            resp = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            error = classify_transport_error(exc, self.settings.LIFEUP_HOST, self.settings.LIFEUP_PORT)
            logger.warning("LifeUp %s failed: %s", context, error.message)
            return ApiResult(error=error)

        try:
            body = resp.json()
        except ValueError:
            body = None

        error = classify_response(resp.status_code, body, context)
        if error:
            logger.warning("LifeUp %s failed: %s", context, error.message)
            return ApiResult(error=error)
        return ApiResult(data=body.get("data"))

    async def execute(self, command: str, context: str = "execute") -> ApiResult:
        """Send one ``lifeup://`` command through the /api gateway."""
        logger.debug("LifeUp command (%s): %s", context, command)
        return await self._request("POST", API_PATH, context, json={"urls": [command]})

    async def _get_list(self, path: str, context: str, params: Optional[dict] = None) -> ApiResult:
        result = await self._request("GET", path, context, params=params)
        if result.ok and result.data is None:
            result.data = []
        return result

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_tasks(self, category_id: Optional[int] = None) -> ApiResult:
        path = "/tasks" if category_id is None else f"/tasks/{category_id}"
        return await self._get_list(path, "get_tasks")

    async def get_task_categories(self) -> ApiResult:
        return await self._get_list("/tasks_categories", "get_task_categories")

    async def get_task_history(self, offset: int = 0, limit: int = 100) -> ApiResult:
        return await self._get_list(
            "/history", "get_task_history", params={"offset": offset, "limit": limit}
        )

    async def get_achievement_categories(self) -> ApiResult:
        return await self._get_list("/achievement_categories", "get_achievement_categories")

    async def get_achievements(self, category_id: int) -> ApiResult:
        return await self._get_list(f"/achievements/{category_id}", "get_achievements")

    async def get_all_achievements(self) -> ApiResult:
        """Achievements of every category, fetched concurrently.

        A category that fails to load is skipped; only a failure to list
        the categories themselves is reported.
        """
        categories = await self.get_achievement_categories()
        if not categories.ok:
            return categories

        ids = [c.get("id") for c in categories.data if c.get("id") is not None]
        results = await asyncio.gather(*(self.get_achievements(cid) for cid in ids))

        achievements = []
        for cid, result in zip(ids, results):
            if not result.ok:
                logger.warning("Skipping achievement category %s: %s", cid, result.error.message)
                continue
            for achievement in result.data:
                achievement.setdefault("category_id", cid)
                achievements.append(achievement)
        return ApiResult(data=achievements)

    async def get_skills(self) -> ApiResult:
        return await self._get_list("/skills", "get_skills")

    async def get_items(self) -> ApiResult:
        return await self._get_list("/items", "get_items")

    async def get_item_categories(self) -> ApiResult:
        return await self._get_list("/items_categories", "get_item_categories")

    async def get_info(self) -> ApiResult:
        return await self._request("GET", "/info", "get_info")

    async def get_coin(self) -> ApiResult:
        return await self._request("GET", "/coin", "get_coin")
