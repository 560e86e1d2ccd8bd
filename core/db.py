"""
core/db.py -- Shared SQLAlchemy metadata and engine construction.

Every store registers its tables on the single `metadata` object below so the
favorites join (users -> favorite_links -> cars) can be expressed across
stores that point at the same database.

Layer rule: core/ is the kernel. No imports from api/, auth/, or fleet/.
"""

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine

metadata = MetaData()


def _set_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode and foreign key enforcement.

    WAL (Write-Ahead Logging) allows readers to proceed without blocking
    during writes. SQLite ignores FOREIGN KEY clauses unless foreign_keys is
    on. Both are set per-connection because SQLite PRAGMAs are not inherited
    by new connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


def create_store_engine(db_url: str) -> Engine:
    """Create an engine for db_url with the SQLite tweaks the stores rely on.

    check_same_thread=False: FastAPI runs sync route handlers on a threadpool,
    so a pooled SQLite connection may be used from a thread other than the
    one that opened it.
    """
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine
