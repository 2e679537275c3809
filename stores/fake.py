"""In-memory waitlist store for tests and local runs"""
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set

from stores.abc import WaitlistStore
from utils.errors import MISSING_RELATION_CODES, UNIQUE_VIOLATION_CODE, StoreError

CREATE_TABLE_RE = re.compile(r'CREATE TABLE (?:IF NOT EXISTS )?(?:public\.)?(\w+)\s*\((.*?)\);', re.IGNORECASE | re.DOTALL)
UNIQUE_COLUMN_RE = re.compile(r'^[ \t]*(\w+)\b[^,]*\bUNIQUE\b', re.IGNORECASE | re.MULTILINE)
CREATE_POLICY_RE = re.compile(r'CREATE POLICY "([^"]+)"', re.IGNORECASE)


class FakeWaitlistStore(WaitlistStore):
    """In-memory fake implementation.

    Tables are lists of row dicts. Unique columns are enforced on insert the
    way the database constraint would, so the duplicate race surfaces as a
    23505 StoreError. execute_raw_statement understands CREATE TABLE and
    CREATE POLICY, which is enough for the waitlist schema statement.

    Operations named in fail_on raise the given exception instead of running.
    """

    def __init__(
        self,
        tables: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        unique_fields: Optional[Dict[str, Set[str]]] = None,
        fail_on: Optional[Dict[str, Exception]] = None,
        now: Optional[datetime] = None,
        privileged: bool = True,
    ):
        self._tables: Dict[str, List[Dict[str, Any]]] = tables if tables is not None else {}
        self._unique_fields: Dict[str, Set[str]] = unique_fields or {}
        self._fail_on = fail_on or {}
        self._now = now
        self._privileged = privileged
        self.statements: List[str] = []
        self.policies: List[str] = []
        self.calls: List[str] = []

    @property
    def tables(self) -> Dict[str, List[Dict[str, Any]]]:
        """Copy of current table contents for assertions"""
        return {name: list(rows) for name, rows in self._tables.items()}

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return list(self._tables.get(table, []))

    def _record_call(self, operation: str):
        self.calls.append(operation)
        if operation in self._fail_on:
            raise self._fail_on[operation]

    def _missing(self, table: str) -> StoreError:
        return StoreError(f'relation "public.{table}" does not exist', code=MISSING_RELATION_CODES[0])

    def exists(self, table: str) -> bool:
        self._record_call('exists')
        return table in self._tables

    def find_by_key(self, table: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        self._record_call('find_by_key')
        if table not in self._tables:
            raise self._missing(table)
        for row in self._tables[table]:
            if row.get(field) == value:
                return dict(row)
        return None

    def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        self._record_call('insert')
        if table not in self._tables:
            raise self._missing(table)

        rows = self._tables[table]
        for field in self._unique_fields.get(table, set()):
            if any(row.get(field) == record.get(field) for row in rows):
                raise StoreError(
                    f'duplicate key value violates unique constraint "{table}_{field}_key"',
                    code=UNIQUE_VIOLATION_CODE,
                )

        row = {
            'id': str(uuid.uuid4()),
            **record,
            'created_at': (self._now or datetime.now(timezone.utc)).isoformat(),
        }
        rows.append(row)
        return dict(row)

    def execute_raw_statement(self, sql: str) -> None:
        self._record_call('execute_raw_statement')
        if not self._privileged:
            raise StoreError('permission denied: raw SQL requires the service role key', code='42501')

        for name, columns in CREATE_TABLE_RE.findall(sql):
            if name in self._tables:
                raise StoreError(f'relation "{name}" already exists', code='42P07')
            self._tables[name] = []
            self._unique_fields[name] = set(UNIQUE_COLUMN_RE.findall(columns))

        self.policies.extend(CREATE_POLICY_RE.findall(sql))
        self.statements.append(sql)
