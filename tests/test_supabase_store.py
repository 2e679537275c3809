"""Tests for SupabaseWaitlistStore against a mocked supabase client."""
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError

from services.waitlist_service import register
from stores.supabase_store import SupabaseWaitlistStore
from utils.errors import StoreError, is_unique_violation


def api_error(message, code):
    return APIError({"message": message, "code": code, "hint": None, "details": None})


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def admin_client():
    return MagicMock()


@pytest.fixture
def supabase_store(client, admin_client):
    return SupabaseWaitlistStore(client, admin_client)


def query(client):
    """The chained query builder returned by client.table(...)"""
    return client.table.return_value


class TestExists:

    def test_table_present(self, supabase_store, client):
        assert supabase_store.exists('waitlist')
        client.table.assert_called_once_with('waitlist')
        query(client).select.assert_called_once_with('count')

    @pytest.mark.parametrize("code", ['42P01', 'PGRST205'])
    def test_missing_relation(self, supabase_store, client, code):
        query(client).select.return_value.limit.return_value.execute.side_effect = api_error(
            'relation "public.waitlist" does not exist', code
        )

        assert not supabase_store.exists('waitlist')

    def test_other_error_raises(self, supabase_store, client):
        query(client).select.return_value.limit.return_value.execute.side_effect = api_error(
            'JWT expired', 'PGRST301'
        )

        with pytest.raises(StoreError, match="JWT expired") as exc_info:
            supabase_store.exists('waitlist')
        assert exc_info.value.code == 'PGRST301'


class TestFindByKey:

    def test_found(self, supabase_store, client):
        execute = query(client).select.return_value.eq.return_value.limit.return_value.execute
        execute.return_value = MagicMock(data=[{"email": "ada@example.com"}])

        assert supabase_store.find_by_key('waitlist', 'email', 'ada@example.com') == {"email": "ada@example.com"}
        query(client).select.return_value.eq.assert_called_once_with('email', 'ada@example.com')

    def test_not_found(self, supabase_store, client):
        execute = query(client).select.return_value.eq.return_value.limit.return_value.execute
        execute.return_value = MagicMock(data=[])

        assert supabase_store.find_by_key('waitlist', 'email', 'ada@example.com') is None


class TestInsert:

    def test_returns_inserted_row(self, supabase_store, client):
        row = {"id": "abc", "name": "Ada", "email": "ada@example.com", "created_at": "2024-01-15T10:30:00+00:00"}
        query(client).insert.return_value.execute.return_value = MagicMock(data=[row])

        assert supabase_store.insert('waitlist', {"name": "Ada", "email": "ada@example.com"}) == row
        query(client).insert.assert_called_once_with({"name": "Ada", "email": "ada@example.com"})

    def test_unique_violation(self, supabase_store, client):
        query(client).insert.return_value.execute.side_effect = api_error(
            'duplicate key value violates unique constraint "waitlist_email_key"', '23505'
        )

        with pytest.raises(StoreError) as exc_info:
            supabase_store.insert('waitlist', {"name": "Ada", "email": "ada@example.com"})
        assert is_unique_violation(exc_info.value)


class TestExecuteRawStatement:

    def test_uses_admin_client(self, supabase_store, client, admin_client):
        supabase_store.execute_raw_statement("select 1;")

        admin_client.rpc.assert_called_once_with('exec_sql', {'query': "select 1;"})
        client.rpc.assert_not_called()

    def test_without_admin_client(self, client):
        store = SupabaseWaitlistStore(client)

        with pytest.raises(StoreError, match="admin operations"):
            store.execute_raw_statement("select 1;")

    def test_rpc_error(self, supabase_store, admin_client):
        admin_client.rpc.return_value.execute.side_effect = api_error('syntax error at or near "selec"', '42601')

        with pytest.raises(StoreError, match="syntax error"):
            supabase_store.execute_raw_statement("selec 1;")


class TestTransportErrors:

    def test_probe_connection_error(self, supabase_store, client):
        query(client).select.return_value.limit.return_value.execute.side_effect = httpx.ConnectError(
            "connection refused"
        )

        with pytest.raises(StoreError, match="connection refused") as exc_info:
            supabase_store.exists('waitlist')
        assert exc_info.value.code is None

    def test_insert_timeout(self, supabase_store, client):
        query(client).insert.return_value.execute.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(StoreError, match="timed out"):
            supabase_store.insert('waitlist', {"name": "Ada", "email": "ada@example.com"})

    def test_rpc_connection_error(self, supabase_store, admin_client):
        admin_client.rpc.return_value.execute.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(StoreError, match="connection refused"):
            supabase_store.execute_raw_statement("select 1;")

    def test_register_surfaces_store_error(self, client):
        query(client).select.return_value.limit.return_value.execute.side_effect = httpx.ConnectError(
            "connection refused"
        )

        with pytest.raises(StoreError):
            register(SupabaseWaitlistStore(client), "Ada", "ada@example.com")
