"""Error types for the waitlist workflow"""
from typing import Optional


class WaitlistError(Exception):
    """Base error; status_code is the HTTP status the API answers with"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WaitlistError):
    """Malformed client input"""
    status_code = 400


class DuplicateError(WaitlistError):
    """Email already on the waitlist"""
    status_code = 400


class NotProvisionedError(WaitlistError):
    """Waitlist table has not been created yet"""
    status_code = 500


class StoreError(WaitlistError):
    """Failure reported by the persistence layer"""
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class UnexpectedError(WaitlistError):
    """Anything not covered above"""
    status_code = 500


# PostgreSQL / PostgREST error codes the workflow cares about
MISSING_RELATION_CODES = ('42P01', 'PGRST205')
UNIQUE_VIOLATION_CODE = '23505'


def is_missing_relation(error: StoreError) -> bool:
    """True when the store says the table does not exist"""
    return error.code in MISSING_RELATION_CODES


def is_unique_violation(error: StoreError) -> bool:
    return error.code == UNIQUE_VIOLATION_CODE
