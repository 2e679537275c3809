"""Supabase-backed waitlist store"""
from typing import Any, Dict, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from stores.abc import WaitlistStore
from utils.errors import StoreError, is_missing_relation
from utils.logger import log_error


def _to_store_error(error: Exception) -> StoreError:
    if isinstance(error, APIError):
        return StoreError(error.message or str(error), code=error.code)
    # Transport failures (connection refused, timeouts) carry no database code
    return StoreError(str(error) or type(error).__name__)


class SupabaseWaitlistStore(WaitlistStore):
    """Production store.

    Table traffic goes through the public (anon key) client so the table's
    row level security policies apply. Raw SQL goes through the admin
    (service role key) client and the exec_sql RPC function.
    """

    def __init__(self, client: Client, admin_client: Optional[Client] = None):
        self._client = client
        self._admin_client = admin_client

    def exists(self, table: str) -> bool:
        try:
            self._client.table(table).select('count').limit(1).execute()
        except (APIError, httpx.HTTPError) as e:
            error = _to_store_error(e)
            if is_missing_relation(error):
                return False
            log_error(f"Error probing table {table}", error=e)
            raise error from e
        return True

    def find_by_key(self, table: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table(table).select('*').eq(field, value).limit(1).execute()
        except (APIError, httpx.HTTPError) as e:
            raise _to_store_error(e) from e
        if not result.data:
            return None
        return result.data[0]

    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self._client.table(table).insert(record).execute()
        except (APIError, httpx.HTTPError) as e:
            raise _to_store_error(e) from e
        if not result.data:
            raise StoreError(f"Insert into {table} returned no rows")
        return result.data[0]

    def execute_raw_statement(self, sql: str) -> None:
        if self._admin_client is None:
            raise StoreError("Missing Supabase environment variables for admin operations")
        try:
            self._admin_client.rpc('exec_sql', {'query': sql}).execute()
        except (APIError, httpx.HTTPError) as e:
            raise _to_store_error(e) from e
