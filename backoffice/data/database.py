# backoffice/data/database.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from backoffice.domain.errors import OrderError, StoreFailure
from backoffice.utils.settings import DATABASE_URL, DB_POOL_SIZE, DB_POOL_TIMEOUT
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)


Base = declarative_base()


def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        #baza w pamieci - jedno polaczenie dla wszystkich sesji
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    return create_engine(
        url,
        pool_size=DB_POOL_SIZE,
        pool_timeout=DB_POOL_TIMEOUT,
        pool_pre_ping=True,
    )


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(bind: Engine | None = None) -> None:
    # import modeli zeby zarejestrowaly sie w Base.metadata
    import backoffice.data.models  # noqa: F401

    target = bind or engine
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=target)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Jedna transakcja na sesji: commit na koncu bloku, rollback przy
    dowolnym bledzie. Bledy domenowe ida dalej bez zmian, bledy
    SQLAlchemy sa opakowane w StoreFailure (OperationalError = retryable).
    """
    try:
        yield db
        db.commit()
    except OrderError as e:
        db.rollback()
        logger.info(f"Transaction rolled back: {e}")
        raise
    except OperationalError as e:
        db.rollback()
        logger.error(f"Transaction rolled back after store error: {e}")
        raise StoreFailure(e.orig or e, retryable=True) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction rolled back after store error: {e}")
        raise StoreFailure(e) from e
    except Exception:
        db.rollback()
        raise
