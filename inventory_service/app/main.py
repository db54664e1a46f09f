# app/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, engine
from shared.exception_handler import setup_exception_handlers
from shared.response_wrapper import JsonResponseMiddleware
from . import models  # registers every table on Base
from .router.access_control import user_management_router
from .router.assets import (
    asset_category_router,
    assets_router,
    assignment_router,
    incident_router,
    maintenance_router,
    movement_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Inventory Service API")

# Create all tables
Base.metadata.create_all(bind=engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(JsonResponseMiddleware)

setup_exception_handlers(app)

# Include routers
app.include_router(assets_router.router)
app.include_router(asset_category_router.router)
app.include_router(assignment_router.router)
app.include_router(movement_router.router)
app.include_router(maintenance_router.router)
app.include_router(incident_router.router)
app.include_router(user_management_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
