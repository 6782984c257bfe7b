"""
Database connection and session.

Schema source of truth: app.models. On startup, Database.create_all() creates all
tables from the current models. The Database handle is built once per application
(see app.main.create_app) and handed to request handlers through get_db, so tests
can construct their own handle against SQLite.
"""
from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _take_write_lock_on_begin(engine) -> None:
    """pysqlite recipe: open every transaction with BEGIN IMMEDIATE.

    pysqlite normally defers BEGIN until the first write, so SELECT ... FOR UPDATE
    (a no-op on SQLite) protects nothing. Taking the database write lock at the
    start of the transaction makes read-check-insert sequences run one at a time.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    def __init__(self, url: str, echo: bool = False):
        self.url = url
        kwargs = {"pool_pre_ping": True, "echo": echo}
        parsed = make_url(url)
        is_sqlite = parsed.get_backend_name() == "sqlite"
        if is_sqlite:
            kwargs["connect_args"] = {"check_same_thread": False, "timeout": 15}
            if parsed.database in (None, "", ":memory:"):
                # One shared connection, otherwise every session sees an empty database
                kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, **kwargs)
        if is_sqlite:
            _take_write_lock_on_begin(self.engine)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def create_all(self) -> None:
        # Import models so Base.metadata has all tables
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
