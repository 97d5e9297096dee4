import logging

from fastapi import APIRouter, Depends, HTTPException

from kitchen.api.dependencies import get_inventory_client
from kitchen.infra.inventory_client import InventoryAPIError, InventoryClient
from kitchen.logic.reporting.categories import waste_by_category
from kitchen.utilities.numbers import round2, to_quantity
from kitchen.utilities.validators import StockItemInput, WasteEventInput

router = APIRouter(prefix="/api", tags=["records"])
logger = logging.getLogger(__name__)


@router.post("/waste", status_code=201)
def register_waste(waste: WasteEventInput, client: InventoryClient = Depends(get_inventory_client)):
    """Validate a waste registration and forward it to the inventory API."""
    try:
        return client.register_waste(waste)
    except InventoryAPIError as e:
        raise HTTPException(status_code=502, detail=f"Could not register waste: {e}")


@router.post("/stock", status_code=201)
def add_stock_item(item: StockItemInput, client: InventoryClient = Depends(get_inventory_client)):
    try:
        return client.add_stock_item(item)
    except InventoryAPIError as e:
        raise HTTPException(status_code=502, detail=f"Could not add stock item: {e}")


@router.get("/waste/ingredient/{ingredient_id}")
def get_ingredient_waste(ingredient_id: str, client: InventoryClient = Depends(get_inventory_client)):
    """Waste history of one ingredient with its total and per-category split."""
    try:
        events = client.get_waste_by_ingredient(ingredient_id)
    except InventoryAPIError as e:
        raise HTTPException(status_code=502, detail=f"Could not load waste for ingredient {ingredient_id}: {e}")
    return {
        'ingredient_id': ingredient_id,
        'events': events,
        'total': round2(sum(to_quantity(e.get('quantity')) for e in events)),
        'by_category': waste_by_category(events),
    }
