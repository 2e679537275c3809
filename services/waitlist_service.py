"""Waitlist-related business logic"""
from typing import Any, Dict

from stores.abc import WaitlistStore
from utils.errors import (
    DuplicateError,
    NotProvisionedError,
    StoreError,
    ValidationError,
    is_missing_relation,
    is_unique_violation,
)
from utils.logger import log_error, log_info
from utils.validation import sanitize_string, validate_email

WAITLIST_TABLE = 'waitlist'

NOT_PROVISIONED_MESSAGE = (
    "The waitlist database hasn't been set up yet. Please visit /admin/setup to set up the database."
)
DUPLICATE_MESSAGE = "This email is already on our waitlist"


def register(store: WaitlistStore, name, email) -> Dict[str, Any]:
    """Add a (name, email) pair to the waitlist and return the stored entry"""
    # Only JSON strings count; false, 0 and objects are treated as missing
    if not isinstance(name, str) or not isinstance(email, str):
        raise ValidationError("Name and email are required")

    name = sanitize_string(name)
    email = sanitize_string(email)

    if not name or not email:
        raise ValidationError("Name and email are required")

    if not validate_email(email):
        raise ValidationError("Please enter a valid email address")

    if not store.exists(WAITLIST_TABLE):
        raise NotProvisionedError(NOT_PROVISIONED_MESSAGE)

    # Check if email already exists
    try:
        existing = store.find_by_key(WAITLIST_TABLE, 'email', email)
    except StoreError as e:
        if is_missing_relation(e):
            raise NotProvisionedError(NOT_PROVISIONED_MESSAGE) from e
        log_error("Error checking for existing user", error=e)
        raise StoreError("Error checking for existing user", code=e.code) from e

    if existing:
        raise DuplicateError(DUPLICATE_MESSAGE)

    # The unique constraint on email settles concurrent submissions that both
    # passed the check above
    try:
        entry = store.insert(WAITLIST_TABLE, {'name': name, 'email': email})
    except StoreError as e:
        if is_unique_violation(e):
            raise DuplicateError(DUPLICATE_MESSAGE) from e
        log_error("Error inserting waitlist entry", error=e)
        raise

    log_info(f"Added waitlist entry {entry.get('id')}")
    return entry


def is_registered(store: WaitlistStore, email) -> bool:
    """Whether an email is already on the waitlist"""
    if not isinstance(email, str):
        return False
    email = sanitize_string(email)
    if not email:
        return False
    if not store.exists(WAITLIST_TABLE):
        return False
    return store.find_by_key(WAITLIST_TABLE, 'email', email) is not None


def is_provisioned(store: WaitlistStore) -> bool:
    return store.exists(WAITLIST_TABLE)
