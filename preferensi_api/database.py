# preferensi_api/database.py
from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from preferensi_api.core.config import Settings


def _normalize_db_url(db_url: str) -> str:
    """
    Append sslmode=require to Postgres URLs if it is not already present.

    SQLite URLs are returned untouched.
    """
    if not db_url.startswith("postgres") or "sslmode=" in db_url:
        return db_url
    if "?" in db_url:
        return db_url + "&sslmode=require"
    return db_url + "?sslmode=require"


def build_engine(settings: Settings) -> Engine:
    """
    Create the engine backing the document store.

    Postgres (Supabase pooler):
      - pool_size=1, max_overflow=0 keeps a single connection per process,
        Supabase Session mode limits the number of clients
      - pool_pre_ping=True validates connections before use

    SQLite:
      - check_same_thread=False since requests run on worker threads
      - in-memory databases share one connection (StaticPool)
    """
    db_url = _normalize_db_url(settings.DATABASE_URL)

    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, echo=settings.DB_ECHO, **kwargs)

    return create_engine(
        db_url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    # Import models so SQLModel metadata is populated before create_all()
    from preferensi_api.models import document as _document_models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    """
    FastAPI dependency that yields a SQLModel Session bound to the
    engine created by `create_app()`.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
