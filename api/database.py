import logging
from contextlib import contextmanager
from typing import Generator

from neo4j import Driver, GraphDatabase, Session
from config import settings

logger = logging.getLogger(__name__)


class Neo4jConnection:
    """Manages the Neo4j driver used as the compliance review record store."""

    def __init__(self):
        """Read connection settings; the driver is created on first use."""
        self.uri = settings.neo4j_uri
        self.user = settings.neo4j_user
        self.password = settings.neo4j_password
        self._driver = None

        if not self.password:
            raise ValueError("NEO4J_PASSWORD is required in settings")

    @property
    def driver(self) -> Driver:
        if self._driver is None:
            self._driver = GraphDatabase.driver(
                self.uri,
                auth=(self.user, self.password),
                max_connection_pool_size=50,
                connection_acquisition_timeout=30,
                max_transaction_retry_time=30
            )
        return self._driver

    def close(self):
        """Close the driver connection"""
        if self._driver:
            self._driver.close()
            self._driver = None

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session with automatic cleanup"""
        session = self.driver.session()
        try:
            yield session
        finally:
            session.close()

    def verify_connectivity(self) -> bool:
        """Verify database connectivity.

        Returns:
            bool: True if connected, False otherwise
        """
        try:
            with self.get_session() as session:
                result = session.run("RETURN 1 as test")
                return result.single()["test"] == 1
        except Exception as e:
            logger.error(f"Database connectivity check failed: {e}")
            return False


# Singleton instance
db = Neo4jConnection()

class BaseRepository:
    """Base repository with common Neo4j operations.

    Repositories inherit query execution and session handling from here.
    """

    def __init__(self):
        self.db = db

    def execute_query(self, query: str, parameters: dict = None) -> list:
        """Execute a query and return results.

        Args:
            query: Cypher query string
            parameters: Optional query parameters

        Returns:
            list: Query results as list of dictionaries
        """
        with self.db.get_session() as session:
            result = session.run(query, parameters or {})
            return [record.data() for record in result]
