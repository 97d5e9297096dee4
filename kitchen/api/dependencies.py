"""Shared FastAPI dependencies."""
from kitchen.infra.inventory_client import InventoryClient


def get_inventory_client():
    """One inventory client per request; tests override this dependency."""
    client = InventoryClient()
    try:
        yield client
    finally:
        client.close()
