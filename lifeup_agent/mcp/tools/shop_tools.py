"""Shop MCP tools: list, search, add and edit shop items."""

from typing import Literal, Optional

from lifeup_agent.mcp.server import mcp
from lifeup_agent.mcp.tools.helpers import open_client, payload, respond, run_mutation
from lifeup_agent.services import shop_service
from lifeup_agent.services.validation_engine import validate

SetTypeArg = Literal["absolute", "relative"]


@mcp.tool()
async def list_shop_items() -> dict:
    """List all shop items."""
    async with open_client() as client:
        result = await client.get_items()
    return respond(result)


@mcp.tool()
async def get_shop_categories() -> dict:
    """List shop item categories."""
    async with open_client() as client:
        result = await client.get_item_categories()
    return respond(result)


@mcp.tool()
async def search_shop_items(
    categoryId: Optional[int] = None,
    searchQuery: Optional[str] = None,
    minPrice: Optional[int] = None,
    maxPrice: Optional[int] = None,
) -> dict:
    """Search shop items by category, text (name/desc) and price range."""
    checked = validate(
        "search_shop_items",
        payload(categoryId=categoryId, searchQuery=searchQuery, minPrice=minPrice, maxPrice=maxPrice),
    )
    if not checked.ok:
        return checked.to_dict()
    async with open_client() as client:
        result = await shop_service.search_items(client, checked.value)
    return respond(result)


@mcp.tool()
async def add_shop_item(
    name: str,
    desc: Optional[str] = None,
    icon: Optional[str] = None,
    title_color_string: Optional[str] = None,
    price: Optional[int] = None,
    stock_number: Optional[int] = None,
    action_text: Optional[str] = None,
    disable_purchase: Optional[bool] = None,
    disable_use: Optional[bool] = None,
    category: Optional[int] = None,
    order: Optional[int] = None,
    purchase_limit: Optional[list[dict]] = None,
    effects: Optional[list[dict]] = None,
    own_number: Optional[int] = None,
    unlist: Optional[bool] = None,
) -> dict:
    """Add an item to the shop.

    stock_number -1 means unlimited. purchase_limit: [{"type": "daily"|"total", "value": n}].
    effects: [{"type": 0-9, "info": {...}}].
    """
    return await run_mutation(
        "add_shop_item",
        payload(
            name=name, desc=desc, icon=icon, title_color_string=title_color_string, price=price,
            stock_number=stock_number, action_text=action_text, disable_purchase=disable_purchase,
            disable_use=disable_use, category=category, order=order,
            purchase_limit=purchase_limit, effects=effects, own_number=own_number, unlist=unlist,
        ),
        name=name,
    )


@mcp.tool()
async def edit_shop_item(
    id: Optional[int] = None,
    name: Optional[str] = None,
    set_name: Optional[str] = None,
    set_desc: Optional[str] = None,
    set_icon: Optional[str] = None,
    set_price: Optional[int] = None,
    set_price_type: Optional[SetTypeArg] = None,
    own_number: Optional[int] = None,
    own_number_type: Optional[SetTypeArg] = None,
    stock_number: Optional[int] = None,
    stock_number_type: Optional[SetTypeArg] = None,
    disable_purchase: Optional[bool] = None,
    disable_use: Optional[bool] = None,
    action_text: Optional[str] = None,
    title_color_string: Optional[str] = None,
    effects: Optional[list[dict]] = None,
    purchase_limit: Optional[list[dict]] = None,
    category_id: Optional[int] = None,
    order: Optional[int] = None,
    unlist: Optional[bool] = None,
) -> dict:
    """Edit a shop item found by id or fuzzy name; set_* fields hold the new values.

    set_price/own_number/stock_number are absolute by default; pass the
    matching *_type="relative" to add a signed delta instead.
    """
    return await run_mutation(
        "edit_shop_item",
        payload(
            id=id, name=name, set_name=set_name, set_desc=set_desc, set_icon=set_icon,
            set_price=set_price, set_price_type=set_price_type, own_number=own_number,
            own_number_type=own_number_type, stock_number=stock_number,
            stock_number_type=stock_number_type, disable_purchase=disable_purchase,
            disable_use=disable_use, action_text=action_text,
            title_color_string=title_color_string, effects=effects,
            purchase_limit=purchase_limit, category_id=category_id, order=order, unlist=unlist,
        ),
    )
