"""Shop item search (fetch then filter in memory)."""

from lifeup_agent.schemas import ShopItemSearch
from lifeup_agent.services.lifeup_client import ApiResult, LifeUpClient


def filter_items(items: list[dict], query: ShopItemSearch) -> list[dict]:
    if query.category_id:
        items = [i for i in items if i.get("category_id") == query.category_id]
    if query.search_query:
        needle = query.search_query.lower()
        items = [
            i for i in items
            if needle in (i.get("name") or "").lower() or needle in (i.get("desc") or "").lower()
        ]
    if query.min_price is not None:
        items = [i for i in items if (i.get("price") or 0) >= query.min_price]
    if query.max_price is not None:
        items = [i for i in items if (i.get("price") or 0) <= query.max_price]
    return items


async def search_items(client: LifeUpClient, query: ShopItemSearch) -> ApiResult:
    result = await client.get_items()
    if not result.ok:
        return result
    return ApiResult(data=filter_items(result.data, query))
