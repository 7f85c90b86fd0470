# backend/database.py
from sqlalchemy.engine import make_url, URL
from sqlmodel import create_engine, SQLModel, Session

from core.config import settings


def normalize_database_url(raw_url: str, use_ssl: bool = False) -> tuple[URL, bool]:
    """
    Accepts the `postgres://...?ssl=true` form used by node style env files.
    Returns the SQLAlchemy URL and whether TLS should be enforced.
    """
    if raw_url.startswith("postgres://"):
        raw_url = "postgresql://" + raw_url[len("postgres://"):]
    url = make_url(raw_url)
    ssl_flag = url.query.get("ssl")
    if ssl_flag is not None:
        use_ssl = use_ssl or str(ssl_flag).lower() == "true"
        url = url.difference_update_query(["ssl"])
    return url, use_ssl


def engine_connect_args(url: URL, use_ssl: bool) -> dict:
    if url.get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    if use_ssl and url.get_backend_name() == "postgresql":
        # reject connections whose server certificate cannot be verified
        return {"sslmode": "verify-full"}
    return {}


DATABASE_URL, DATABASE_SSL = normalize_database_url(settings.DATABASE_URL, settings.DATABASE_SSL)

# Create the engine
engine = create_engine(
    DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_recycle=3600,
    connect_args=engine_connect_args(DATABASE_URL, DATABASE_SSL),
)

def create_db_and_tables():
    """Initializes the database and creates all tables from models package"""
    # Importing models package ensures SQLModel metadata is populated
    import models  # noqa: F401
    SQLModel.metadata.create_all(engine)

# Dependency to get a database session
def get_session():
    """Provides a transactional database session."""
    with Session(engine) as session:
        yield session
