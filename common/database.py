import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from common.config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)

# SQLite needs a special flag when used in a multi-threaded web app.
connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=connect_args)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    class_=Session,
)

Base = declarative_base()


def init_db(bind=None):
    """Create all tables registered on ``Base``."""
    # Registers every mapped class on Base.metadata.
    import auth.schemas  # noqa: F401
    import event.schemas  # noqa: F401
    import tickets.schemas  # noqa: F401
    import tiers.schemas  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database schema ready")


def get_db():
    """Provide a database session to FastAPI routes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
