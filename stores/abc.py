"""Abstract interface for the hosted waitlist store"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class WaitlistStore(ABC):
    """Table-oriented access to the store plus privileged raw SQL.

    Implementations:
    - SupabaseWaitlistStore: hosted Supabase project
    - FakeWaitlistStore: in-memory, for tests and local runs

    Every method raises utils.errors.StoreError on failure, with the
    store's error code attached when there is one.
    """

    @abstractmethod
    def exists(self, table: str) -> bool:
        """Probe whether a table exists.

        Returns:
            False when the store reports a missing relation, True otherwise
        """
        ...

    @abstractmethod
    def find_by_key(self, table: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        """Return the first row where field == value, or None"""
        ...

    @abstractmethod
    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it with store-assigned columns"""
        ...

    @abstractmethod
    def execute_raw_statement(self, sql: str) -> None:
        """Run a SQL statement with privileged credentials"""
        ...
