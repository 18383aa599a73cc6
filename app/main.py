from fastapi import FastAPI
from contextlib import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware

# Import core components
from app.core.logging_config import setup_logging
from app.core.settings import settings, load_store_config
from app.middleware.logging import LoggingMiddleware

# Import configuration
from app.config import init_firebase
from app.db import ensure_schema
from app.services.device_store import DeviceStore
from app.services.push_sender import FirebasePushSender

# Import route modules
from app.routes import devices, health

# Set up logging first
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic: a missing store URL aborts startup
    store_config = load_store_config(settings)

    logger.info("=" * 50)
    logger.info("Device push API starting up")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"CORS origins: {settings.cors_origins}")
    logger.info(f"Push fan-out concurrency: {settings.push_max_concurrency}")

    # Initialize Firebase (skip in test environment)
    if not settings.is_test:
        fcm_ready = init_firebase(settings.firebase_cert_path)
        logger.info(f"FCM: {'configured' if fcm_ready else 'not configured'}")
    logger.info("=" * 50)

    store = DeviceStore.from_config(store_config)
    ensure_schema(store.engine)

    app.state.settings = settings
    app.state.device_store = store
    app.state.push_sender = FirebasePushSender()

    yield
    # Shutdown logic
    store.engine.dispose()
    logger.info("Device push API shutting down gracefully")


app = FastAPI(
    title="Device Push API",
    description="Device registry and push notification dispatch",
    version="1.0.0",
    lifespan=lifespan,
)

# Add middleware in correct order (last added = first executed)
app.add_middleware(LoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(devices.router, prefix="/api", tags=["Devices"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info" if settings.is_development else "warning"
    )
