import os
import logging
import platform
import sys
from pathlib import Path
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import AsyncAdaptedQueuePool

from app.models.base import Base

logger = logging.getLogger(__name__)

# Get project root directory
def get_project_root():
    """Get the absolute path to the project root directory."""
    return Path(__file__).parent.parent.parent.absolute()

# Get production database path based on OS
def get_production_db_path():
    """Get the production database path based on OS."""
    home = Path.home()

    if platform.system() == "Linux":
        db_dir = home / ".config" / "alert-ledger"
    elif platform.system() == "Darwin":  # macOS
        db_dir = home / "Library" / "Application Support" / "alert-ledger"
    elif platform.system() == "Windows":
        db_dir = home / "AppData" / "Local" / "alert-ledger"
    else:
        db_dir = Path("./data")

    db_dir.mkdir(parents=True, exist_ok=True)
    return str(db_dir / "alerts.db")

def env_flag(name, default="false"):
    """Read a boolean environment variable."""
    return os.environ.get(name, default).lower() in ("1", "true", "yes", "on")

# Determine if we're in test mode
IS_TEST = "ALERT_LEDGER_TEST_MODE" in os.environ or "pytest" in sys.modules

# Determine the test database type: in-memory or file-based
TEST_DB_TYPE = os.environ.get("ALERT_LEDGER_TEST_DB_TYPE", "memory").lower()

# Echo every statement, the equivalent of a debug client
SQL_ECHO = env_flag("ALERT_LEDGER_SQL_ECHO")

if "ALERT_LEDGER_DB_PATH" in os.environ:
    DB_PATH = os.environ.get("ALERT_LEDGER_DB_PATH")
elif IS_TEST:
    if TEST_DB_TYPE == "memory":
        DB_PATH = ":memory:"
    else:
        DB_PATH = os.path.join(get_project_root(), "data/test_alerts.db")
else:
    DB_PATH = get_production_db_path()

if DB_PATH == ":memory:":
    SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
else:
    # For relative paths, make them absolute using project root
    if not os.path.isabs(DB_PATH):
        DB_PATH = os.path.join(get_project_root(), DB_PATH)
    os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)
    SQLALCHEMY_DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"

def create_engine_for_url(url, echo=False):
    """Create an async engine with foreign keys enforced on every SQLite connection."""
    engine_kwargs = {
        "echo": echo,
        "connect_args": {"check_same_thread": False},  # Needed for SQLite
    }
    if url.endswith(":memory:"):
        # Every connection to :memory: is a separate database, so the pool holds
        # exactly one. Sessions wait for it, one transaction at a time.
        engine_kwargs["poolclass"] = AsyncAdaptedQueuePool
        engine_kwargs["pool_size"] = 1
        engine_kwargs["max_overflow"] = 0

    async_engine = create_async_engine(url, **engine_kwargs)
    enable_sqlite_foreign_keys(async_engine)
    return async_engine

def enable_sqlite_foreign_keys(async_engine):
    """Turn on ON DELETE CASCADE and reference checks for SQLite connections."""
    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

engine = create_engine_for_url(SQLALCHEMY_DATABASE_URL, echo=SQL_ECHO)

# Create async session factory
async_session = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

async def init_db():
    """Initialize the database by creating all tables."""
    async with engine.begin() as conn:
        # In test mode, we might want to drop and recreate tables
        if IS_TEST and env_flag("ALERT_LEDGER_RESET_TEST_DB"):
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("Test database tables dropped.")

        # This will create tables if they don't exist
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Database tables created successfully at {DB_PATH}")

async def get_session() -> AsyncSession:
    """Get a database session."""
    async with async_session() as session:
        yield session
