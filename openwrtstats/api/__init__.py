"""
API Routers Module

FastAPI routers registered in main.py.

Module Organization:

    openwrt.py - Router status aggregation
        • Prefix: /api
        • Routes: /openwrt
        • Purpose: JSON summary consumed by the dashboard
        • Design: One aggregation pass per request, always 200 once routed

Adding New Routers:

    1. Create a module in openwrtstats/api/ with `router = APIRouter()`
    2. Import it here and add it to __all__
    3. Register it in main.py with a prefix:
        app.include_router(newmodule.router, prefix="/api", tags=["NewFeature"])
"""
from . import openwrt

__all__ = ["openwrt"]
