from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router
from app.core import get_logger, settings
from app.services import check_groq_health

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Iniciando Proposal Timeline Service [{settings.app_env}]")
    if not settings.copilot_enabled:
        logger.warning("GROQ_API_KEY no configurada: co-pilot deshabilitado")
    yield
    logger.info("Cerrando Proposal Timeline Service")


app = FastAPI(
    title="Proposal Timeline Service",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handler global
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Routes
app.include_router(router, prefix="/api", tags=["Timeline"])


@app.get("/health")
async def health_check():
    return {"status": "ok", "env": settings.app_env}


@app.get("/health/llm")
async def llm_health_check():
    return {"copilot_enabled": settings.copilot_enabled, "groq_reachable": await check_groq_health()}
