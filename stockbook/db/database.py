import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from stockbook.core.config import settings
from stockbook.db.errors import translate_integrity_error

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless this is set on every connection.
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str | None = None, *, echo: bool | None = None) -> Engine:
    url = database_url or settings.database_url
    is_sqlite = url.startswith("sqlite")

    connect_args: dict = {}
    if is_sqlite:
        connect_args["check_same_thread"] = False
    else:
        connect_args["application_name"] = settings.app_name
        if settings.database_sslmode:
            connect_args["sslmode"] = settings.database_sslmode

    built = create_engine(
        url,
        echo=settings.sql_echo if echo is None else echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,
        pool_recycle=settings.db_pool_recycle_seconds if not is_sqlite else -1,
    )
    logger.info("database engine configured for %s", built.url.render_as_string(hide_password=True))
    return built


engine = build_engine()

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Run one unit of work in a single transaction.

    Commits when the block exits normally. An ``IntegrityError`` is rolled back
    and re-raised as the matching ``ConstraintViolation``; any other exception
    is rolled back and propagated as is.
    """
    db = factory()
    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        violation = translate_integrity_error(exc)
        logger.warning("write rejected by database: %s", violation)
        raise violation from exc
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create every mapped table. Migrations are the production path."""
    # Registers the mappers on Base.metadata.
    import stockbook.models  # noqa: F401

    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info("schema created on %s", target.url.render_as_string(hide_password=True))
