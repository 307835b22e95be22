"""
openwrtstats Server - Main FastAPI Application

Serves the aggregated status of several OpenWrt style routers as JSON and a
small refreshable dashboard page.

Routing Structure:

    1. Direct app routes (registered on main app):
       - GET  /              -> Dashboard page
       - GET  /health        -> Version and configured routers

    2. Router status API (prefix: /api):
       - GET  /api/openwrt   -> Aggregated uptimes, SSID counts and clients

    3. Static files:
       - /static/*           -> Dashboard assets

    Any other path answers 404 with {"error": "Not Found", "message": "..."}.

Running:
    python -m openwrtstats serve
    uvicorn openwrtstats.main:app --host 0.0.0.0 --port 8080
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from openwrtstats.config import settings, load_inventory, SERVER_VERSION
from openwrtstats.api import openwrt
from openwrtstats.utils.transform import read_static, inject_js

# Configure logging based on OWS_DEBUG setting
log_level = logging.DEBUG if settings.debug else logging.INFO
logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "The requested URL was not found on this server."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(f"Starting openwrtstats server v{SERVER_VERSION}...")
    inventory = load_inventory(settings)
    logger.info(f"Configured for {len(inventory.routers)} router(s)")
    for router in inventory.routers:
        logger.info(f"  - {router.id}: {router.info_url}")
    if inventory.lease_url:
        logger.info(f"DHCP leases from {inventory.lease_url}")
    else:
        logger.info("No DHCP lease source configured - clients shown by MAC address")
    logger.info(f"Timeout (OWS_TIMEOUT): {settings.timeout}s")
    logger.info(f"Server listening on {settings.server_host}:{settings.server_port}")

    yield

    logger.info("Shutting down openwrtstats server...")


# Create FastAPI application
app = FastAPI(
    title="openwrtstats",
    description="Aggregated uptime, wireless client and DHCP lease status for OpenWrt routers",
    version=SERVER_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(openwrt.router, prefix="/api", tags=["Routers"])

# Mount static files
static_path = Path(__file__).parent / "static"
app.mount("/static", StaticFiles(directory=str(static_path)), name="static")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Answer unknown paths with a JSON 404 body."""
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"error": "Not Found", "message": NOT_FOUND_MESSAGE}
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "message": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


@app.get("/", response_class=HTMLResponse, tags=["UI"])
async def dashboard():
    """Serve the dashboard page."""
    content = read_static("index.html")
    if content:
        return HTMLResponse(content=inject_js(content, "/static/dashboard.js"))

    return HTMLResponse(content="""
        <!DOCTYPE html>
        <html>
        <head><title>openwrtstats</title></head>
        <body>
            <h1>openwrtstats</h1>
            <p>Dashboard not available.</p>
            <ul>
                <li><a href="/api/openwrt">Router status (JSON)</a></li>
                <li><a href="/docs">API Documentation (Swagger UI)</a></li>
            </ul>
        </body>
        </html>
    """)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint.

    Returns:
        - ok: At least one router configured
        - no_routers: Configuration is empty or invalid
    """
    inventory = load_inventory(settings)
    routers = inventory.routers
    return {
        "status": "ok" if routers else "no_routers",
        "version": SERVER_VERSION,
        "routers": len(routers),
        "router_ids": [router.id for router in routers],
        "lease_source": inventory.lease_url is not None
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "openwrtstats.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=True
    )
