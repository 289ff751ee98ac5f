# shoepos/main.py - API del punto de venta de calzado
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shoepos.api.v1 import reports, sales, stock
from shoepos.core.config import settings
from shoepos.core.database import Database
from shoepos.core.exceptions import POSError, ValidationError

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    log_level = getattr(logging, level, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # basicConfig no hace nada si uvicorn ya configuró el root logger
    logging.getLogger("shoepos").setLevel(log_level)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Crear la app; la BD se abre al arrancar y se cierra al apagar"""
    configure_logging()
    database = database or Database(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.connect()
        logger.info(f"🚀 {settings.PROJECT_NAME} iniciado ({settings.ENVIRONMENT})")
        try:
            yield
        finally:
            database.disconnect()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url="/docs",
        description="Inventario y ventas para punto de venta de calzado",
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(POSError)
    async def pos_error_handler(request: Request, exc: POSError):
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        body = ValidationError("Datos de entrada inválidos").to_dict()
        body["detail"] = jsonable_encoder(exc.errors())
        return JSONResponse(status_code=ValidationError.status_code, content=body)

    @app.get("/")
    async def root():
        return {
            "message": "🚀 Shoe POS Backend is running",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health")
    async def health(request: Request):
        db_ok = request.app.state.database.ping()
        return JSONResponse(
            status_code=200 if db_ok else 503,
            content={
                "status": "healthy" if db_ok else "unhealthy",
                "database": "connected" if db_ok else "unreachable",
            },
        )

    app.include_router(stock.router, prefix=f"{settings.API_V1_STR}/stock", tags=["stock"])
    app.include_router(sales.router, prefix=f"{settings.API_V1_STR}/sales", tags=["sales"])
    app.include_router(reports.router, prefix=f"{settings.API_V1_STR}/reports", tags=["reports"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    print("🚀 Iniciando Shoe POS Backend")
    print("=" * 60)
    print(f"🌍 Entorno: {settings.ENVIRONMENT}")
    print(f"📍 Puerto: {settings.PORT}")
    print(f"💾 Base de datos: {settings.DATABASE_URL[:50]}...")
    print(f"📚 Documentación: http://localhost:{settings.PORT}/docs")
    print("=" * 60)

    uvicorn.run(
        "shoepos.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG
    )
