"""Waitlist table provisioning"""
from typing import Any, Dict

from services.waitlist_service import WAITLIST_TABLE
from stores.abc import WaitlistStore
from utils.errors import ValidationError
from utils.logger import log_error, log_info

WAITLIST_SCHEMA_SQL = f"""-- Create the waitlist table
CREATE TABLE public.{WAITLIST_TABLE} (
  id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
  name TEXT NOT NULL,
  email TEXT NOT NULL UNIQUE,
  created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

-- Set up RLS (Row Level Security)
ALTER TABLE public.{WAITLIST_TABLE} ENABLE ROW LEVEL SECURITY;

-- Create policy for inserting (anyone can insert)
CREATE POLICY "Allow anyone to insert to waitlist"
  ON public.{WAITLIST_TABLE}
  FOR INSERT
  TO anon, authenticated
  WITH CHECK (true);

-- Create policy for selecting (anyone can view)
CREATE POLICY "Allow anyone to select from waitlist"
  ON public.{WAITLIST_TABLE}
  FOR SELECT
  TO anon, authenticated
  USING (true);
"""

CREATED_MESSAGE = "Database setup completed successfully! The waitlist table has been created."
ALREADY_EXISTS_MESSAGE = "The waitlist table already exists. Your database is ready to use!"


def get_schema_sql() -> str:
    """SQL an operator can paste into the Supabase SQL editor"""
    return WAITLIST_SCHEMA_SQL


def execute_statement(store: WaitlistStore, sql) -> None:
    """Run an operator-supplied statement with privileged credentials"""
    if not sql or not str(sql).strip():
        raise ValidationError("SQL query is required")
    try:
        store.execute_raw_statement(sql)
    except Exception as e:
        log_error("Error executing SQL", error=e)
        raise


def ensure_provisioned(store: WaitlistStore) -> Dict[str, Any]:
    """
    Create the waitlist table and its policies unless it already exists.

    Safe to call repeatedly: when the table is present nothing is executed.
    Failures of the creation statement propagate unchanged; nothing is retried.
    """
    if store.exists(WAITLIST_TABLE):
        return {"created": False, "message": ALREADY_EXISTS_MESSAGE}

    log_info(f"Table {WAITLIST_TABLE} missing, running schema statement")
    execute_statement(store, WAITLIST_SCHEMA_SQL)
    return {"created": True, "message": CREATED_MESSAGE}
