"""Application context for dependency injection"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config.database import StoreConfig, create_store
from stores.abc import WaitlistStore
from services.waitlist_service import WAITLIST_TABLE
from stores.fake import FakeWaitlistStore


@dataclass(frozen=True)
class AppContext:
    """Dependencies shared by the routes. Use for_test() in tests."""
    store: WaitlistStore

    @classmethod
    def from_config(cls, config: StoreConfig) -> "AppContext":
        return cls(store=create_store(config))

    @classmethod
    def from_env(cls) -> "AppContext":
        return cls.from_config(StoreConfig.from_env())

    @classmethod
    def for_test(cls, *, entries: Optional[List[Dict[str, Any]]] = None, provisioned: bool = True) -> "AppContext":
        """Context around a FakeWaitlistStore.

        Args:
            entries: Pre-populated waitlist rows (implies provisioned)
            provisioned: Whether the waitlist table already exists
        """
        tables = {}
        unique_fields = {}
        if provisioned or entries:
            tables[WAITLIST_TABLE] = list(entries or [])
            unique_fields[WAITLIST_TABLE] = {'email'}
        return cls(store=FakeWaitlistStore(tables=tables, unique_fields=unique_fields))
