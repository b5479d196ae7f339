"""
Invariant Console - FastAPI Backend
Main application entry point
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from . import __version__
from .api import diagnostics, plugins, solve
from .core.config import settings
from .solvers.dispatcher import InvariantSolver
from .solvers.fallback import FallbackClient

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Startup
    logger.info("Starting Invariant Console API...")

    app.state.settings = settings
    app.state.solver = InvariantSolver(
        modulus=settings.MODULUS,
        plugin_order=settings.PLUGIN_ORDER,
    )
    app.state.fallback = (
        FallbackClient(
            base_url=settings.OLLAMA_HOST,
            model=settings.FALLBACK_MODEL,
            timeout=settings.FALLBACK_TIMEOUT,
        )
        if settings.FALLBACK_ENABLED
        else None
    )

    logger.info(
        f"Solver ready with {len(app.state.solver.registry)} invariants "
        f"(fallback {'enabled' if app.state.fallback else 'disabled'})"
    )

    yield

    # Shutdown
    logger.info("Shutting down Invariant Console API...")


# Create FastAPI application
app = FastAPI(
    title="Invariant Console API",
    description="""
    Deterministic invariant-matching console for competition mathematics.

    ## Features

    * **Solve**: First-match dispatch over the invariant plugins, with an optional fallback
    * **Plugins**: Registered invariants in dispatch order
    * **Diagnostics**: Regression battery and reference benchmark
    """,
    version=__version__,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(solve.router, prefix="/api/solve", tags=["Solve"])
app.include_router(plugins.router, prefix="/api/plugins", tags=["Plugins"])
app.include_router(diagnostics.router, prefix="/api/diagnostics", tags=["Diagnostics"])


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Invariant Console API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "invariant_console.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG
    )
