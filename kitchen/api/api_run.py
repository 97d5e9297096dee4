import logging

from fastapi import FastAPI

from kitchen.api.routes import analytics, waste

# Logging
logger = logging.getLogger("kitchen_app")

# Initialize FastAPI app
app = FastAPI(title="Kitchen Waste Analytics API")

# Include routers
app.include_router(analytics.router)
app.include_router(waste.router)


@app.get("/health")
def health():
    return {"status": "ok"}
