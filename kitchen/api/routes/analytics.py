import logging
from datetime import datetime
from typing import Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from kitchen.api.dependencies import get_inventory_client
from kitchen.infra.inventory_client import InventoryAPIError, InventoryClient
from kitchen.infra.pdf_utils import generate_pdf_for_report
from kitchen.logic.reporting.categories import waste_by_category
from kitchen.logic.reporting.metrics import dashboard_stats, product_efficiency
from kitchen.logic.reporting.ranking import lowest_stock, most_consumed
from kitchen.logic.reporting.trends import aggregate_monthly, to_chart_rows, waste_trend
from kitchen.logic.stock.analysis import classify_stock, stock_status_counts
from kitchen.utilities.config import MONTH_LOCALE, WASTE_WINDOW_DAYS
from kitchen.utilities.constants import TOP_N

router = APIRouter(prefix="/api/analytics", tags=["analytics"])
logger = logging.getLogger(__name__)


def _fetch_stock(client: InventoryClient):
    try:
        return client.get_stock_items()
    except InventoryAPIError as e:
        raise HTTPException(status_code=502, detail=f"Could not load stock data: {e}")


def _fetch_waste(client: InventoryClient):
    try:
        return client.get_all_waste()
    except InventoryAPIError as e:
        raise HTTPException(status_code=502, detail=f"Could not load waste data: {e}")


def _fetch_all(client: InventoryClient) -> Tuple[list, list]:
    return _fetch_stock(client), _fetch_waste(client)


@router.get("/stats")
def get_stats(client: InventoryClient = Depends(get_inventory_client)):
    stock, waste = _fetch_all(client)
    logger.info("Stats request: %s stock items, %s waste events", len(stock), len(waste))
    return dashboard_stats(stock, waste, window_days=WASTE_WINDOW_DAYS)


@router.get("/waste-types")
def get_waste_types(client: InventoryClient = Depends(get_inventory_client)):
    return waste_by_category(_fetch_waste(client))


@router.get("/waste-trend")
def get_waste_trend(client: InventoryClient = Depends(get_inventory_client)):
    return waste_trend(_fetch_waste(client), locale=MONTH_LOCALE)


@router.get("/consumption-trend")
def get_consumption_trend(client: InventoryClient = Depends(get_inventory_client)):
    buckets = aggregate_monthly(_fetch_waste(client), locale=MONTH_LOCALE)
    return to_chart_rows(buckets)


@router.get("/top-ingredients")
def get_top_ingredients(limit: int = Query(default=TOP_N, ge=1, le=50),
                        client: InventoryClient = Depends(get_inventory_client)):
    stock, waste = _fetch_all(client)
    return most_consumed(stock, waste, limit)


@router.get("/low-stock")
def get_low_stock(limit: int = Query(default=TOP_N, ge=1, le=50),
                  client: InventoryClient = Depends(get_inventory_client)):
    return lowest_stock(_fetch_stock(client), limit)


@router.get("/product-efficiency")
def get_product_efficiency(client: InventoryClient = Depends(get_inventory_client)):
    return product_efficiency(_fetch_waste(client))


@router.get("/stock-status")
def get_stock_status(client: InventoryClient = Depends(get_inventory_client)):
    stock = _fetch_stock(client)
    return {'items': classify_stock(stock), 'counts': stock_status_counts(stock)}


@router.get("/report.pdf")
def export_report_pdf(client: InventoryClient = Depends(get_inventory_client)):
    stock, waste = _fetch_all(client)
    now = datetime.now()
    report = {
        'generated_at': now.strftime("%d-%m-%Y %H:%M"),
        'stats': dashboard_stats(stock, waste, window_days=WASTE_WINDOW_DAYS),
        'waste_types': waste_by_category(waste),
        'waste_trend': waste_trend(waste, locale=MONTH_LOCALE),
        'top_ingredients': most_consumed(stock, waste),
        'low_stock': lowest_stock(stock),
    }
    pdf_bytes = generate_pdf_for_report(report)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=waste_report_{now.strftime('%Y%m%d')}.pdf"
        },
    )
