# shoepos/core/database.py
import logging
import os
from contextlib import contextmanager
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shoepos.core.exceptions import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Conexión a la BD de todo el proceso.

    Se abre una vez al arrancar (`connect`) y se cierra al apagar
    (`disconnect`); cada request obtiene su propia `Session`.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def connect(self) -> None:
        """Crear engine y tablas"""
        if self.engine is not None:
            return

        kwargs = {}
        if self.is_sqlite:
            kwargs["connect_args"] = {"check_same_thread": False}
            path = self.url.replace("sqlite:///", "", 1)
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                # Memoria: todas las sesiones deben ver la misma conexión
                kwargs["poolclass"] = StaticPool
            elif os.path.dirname(path):
                os.makedirs(os.path.dirname(path), exist_ok=True)
        else:
            kwargs["pool_pre_ping"] = True

        self.engine = create_engine(self.url, **kwargs)
        self._session_factory = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False
        )

        # Registrar los modelos antes de crear las tablas
        from shoepos import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"💾 Base de datos lista: {self._safe_url()}")

    def disconnect(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("🔌 Conexión a base de datos cerrada")

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database.connect() no ha sido llamado")
        return self._session_factory()

    @contextmanager
    def get_db(self) -> Generator[Session, None, None]:
        """Context manager para BD"""
        db = self.session()
        try:
            yield db
        finally:
            db.close()

    def ping(self) -> bool:
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"❌ Ping a base de datos falló: {e}")
            return False

    def _safe_url(self) -> str:
        if self.is_sqlite:
            return self.url
        return self.url[:30] + "..."


@contextmanager
def storage_guard(db: Session, action: str) -> Generator[None, None, None]:
    """Convertir fallos de SQLAlchemy en StorageError (con rollback)"""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Error de base de datos al {action}: {e}")
        raise StorageError(f"Error de base de datos al {action}") from e


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependencia FastAPI: sesión por request"""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
