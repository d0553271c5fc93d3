"""
Database Session Management
Creates and manages the SQLAlchemy engine, its connection pool and the
session factory.

The pool is the only resource shared between requests. It is wrapped in an
explicitly constructed ``Database`` object that the application creates on
startup and disposes on shutdown, and that is handed to the services that
need it.
"""

import logging
from contextlib import contextmanager
from time import monotonic
from typing import Any, Iterator, Optional

from sqlalchemy import create_engine, event, exc, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from subs_api.core.config import Settings
from subs_api.models import Base


logger = logging.getLogger(__name__)


class Database:
    """
    Owner of the engine (connection pool) and session factory.

    Lifecycle:
        db = Database(url, pool_size=10, ...)
        db.init()           # build engine + session factory
        with db.session() as session:
            ...             # one unit of work per call
        db.close()          # dispose every pooled connection

    Args:
        url: SQLAlchemy database URL
        idle_timeout: Seconds a pooled connection may stay idle before it is
            discarded on the next checkout (None disables the check)
        statement_timeout: PostgreSQL statement_timeout in milliseconds
            (0 or None disables it)
        **engine_options: Passed through to ``create_engine``
    """

    def __init__(
        self,
        url: str,
        idle_timeout: Optional[int] = None,
        statement_timeout: Optional[int] = None,
        **engine_options: Any,
    ):
        self.url = url
        self.idle_timeout = idle_timeout
        self.statement_timeout = statement_timeout
        self.engine_options = engine_options
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        Build a PostgreSQL-backed Database from application settings.

        Pool configuration:
        - pool_size=DB_MAX_OPEN_CONNS with max_overflow=0: hard ceiling
        - pool_timeout: wait for a free connection before failing
        - pool_recycle: max connection lifetime
        - pool_pre_ping: verify connections before using them
        """
        return cls(
            settings.database_url,
            idle_timeout=settings.DB_CONN_IDLE_LIFETIME,
            statement_timeout=settings.DB_STATEMENT_TIMEOUT,
            echo=settings.DEBUG,  # Log SQL queries in debug mode
            pool_size=settings.DB_MAX_OPEN_CONNS,
            max_overflow=0,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_CONN_MAX_LIFETIME,
            pool_pre_ping=True,
        )

    def init(self) -> None:
        """Create the engine and session factory. Safe to call once."""
        if self.engine is not None:
            return

        options = dict(self.engine_options)
        if self.statement_timeout:
            connect_args = dict(options.pop("connect_args", {}))
            connect_args["options"] = f"-c statement_timeout={int(self.statement_timeout)}"
            options["connect_args"] = connect_args

        self.engine = create_engine(self.url, **options)
        if self.idle_timeout:
            self._install_idle_timeout(self.engine, self.idle_timeout)

        # autocommit/autoflush off: every unit of work commits explicitly
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )
        logger.info(f"Database engine created for {self.engine.url.render_as_string(hide_password=True)}")

    def close(self) -> None:
        """Dispose the engine, closing every pooled connection."""
        if self.engine is None:
            logger.warning("Database engine is not initialised, nothing to close")
            return

        self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    @property
    def session_factory(self) -> Optional[sessionmaker]:
        """Raw session factory, for callers that manage commit/close themselves."""
        return self._session_factory

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Acquire a session for one unit of work.

        Commits when the block exits normally, rolls back when it raises,
        and always returns the connection to the pool.
        """
        if self._session_factory is None:
            raise RuntimeError("Database.init() must be called before session()")

        db = self._session_factory()
        try:
            yield db
            db.commit()
        except BaseException:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except exc.SQLAlchemyError as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def create_schema(self) -> None:
        """Create all tables that don't exist yet."""
        Base.metadata.create_all(bind=self.engine)

    def drop_schema(self) -> None:
        """Drop all tables known to the models."""
        Base.metadata.drop_all(bind=self.engine)

    @staticmethod
    def _install_idle_timeout(engine: Engine, idle_timeout: int) -> None:
        # Stamp connections when they go back to the pool; on checkout, a
        # DisconnectionError makes the pool discard the stale connection and
        # retry with a fresh one.
        @event.listens_for(engine, "connect")
        def _reset_stamp(dbapi_connection, connection_record):
            connection_record.info.pop("checked_in_at", None)

        @event.listens_for(engine, "checkin")
        def _stamp_checkin(dbapi_connection, connection_record):
            connection_record.info["checked_in_at"] = monotonic()

        @event.listens_for(engine, "checkout")
        def _expire_idle(dbapi_connection, connection_record, connection_proxy):
            checked_in_at = connection_record.info.get("checked_in_at")
            if checked_in_at is not None and monotonic() - checked_in_at > idle_timeout:
                raise exc.DisconnectionError("connection exceeded idle lifetime")
