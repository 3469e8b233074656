"""
Subjects API — main entry point.
Creates FastAPI app, sets up lifespan (Mongo client + indexes), CORS, request
logging middleware, registers all routes.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, APIRouter, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from subjects_api.config import logger, get_version_info, get_cors_origins
from subjects_api.database import create_client, get_database, ensure_indexes
from subjects_api.routes import register_all_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - opens/closes the Mongo client"""
    logger.info("🚀 FastAPI app starting up...")
    logger.info("REGISTERED ROUTES: %s", [r.path for r in app.routes])

    client = create_client()
    app.state.mongo_client = client
    app.state.db = get_database(client)

    try:
        await ensure_indexes(app.state.db)
    except Exception as e:
        logger.error(f"❌ Failed to ensure indexes: {e}")
    logger.info("=" * 60)

    yield

    logger.info("🛑 FastAPI app shutting down...")
    client.close()


# Create the main app with lifespan
app = FastAPI(title="Subjects API", lifespan=lifespan)

# Create a router with the /api prefix
api_router = APIRouter(prefix="/api")


@api_router.get("/version")
async def get_version():
    """Public version endpoint for deployment verification"""
    return get_version_info()


# Register all route modules on the api_router
register_all_routes(api_router)

# Include the api_router on the app
app.include_router(api_router)


# Root-level health check endpoint (for Kubernetes probes)
@app.get("/health")
async def root_health_check():
    """Health check for Kubernetes liveness/readiness probes"""
    return {"status": "healthy", "service": "Subjects API"}


# ============== ERROR HANDLERS ==============

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete request bodies are a client error (400)"""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


# ============== REQUEST LOGGING MIDDLEWARE ==============

@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log method, path, status and latency for all requests"""
    start_time = time.time()
    status_code = 500

    try:
        response = await call_next(request)
        status_code = response.status_code
    except Exception as e:
        logger.error(f"Request failed: {type(e).__name__}: {str(e)}")
        raise
    finally:
        response_time_ms = int((time.time() - start_time) * 1000)
        logger.info(f"{request.method} {request.url.path} -> {status_code} ({response_time_ms} ms)")

    return response


# ============== CORS ==============

app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=get_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)
