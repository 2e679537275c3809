"""Database configuration and Supabase client initialization"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from supabase import create_client, Client

from stores.supabase_store import SupabaseWaitlistStore
from utils.logger import log_warning


@dataclass(frozen=True)
class StoreConfig:
    """Supabase project URL and the two keys the service uses.

    anon_key serves registration traffic; service_role_key is only needed
    for provisioning.
    """
    url: Optional[str]
    anon_key: Optional[str]
    service_role_key: Optional[str] = None

    @staticmethod
    def from_env() -> "StoreConfig":
        """Load configuration from environment variables (and .env)"""
        load_dotenv()
        return StoreConfig(
            url=os.environ.get('SUPABASE_URL') or os.environ.get('NEXT_PUBLIC_SUPABASE_URL'),
            anon_key=os.environ.get('SUPABASE_ANON_KEY') or os.environ.get('NEXT_PUBLIC_SUPABASE_ANON_KEY'),
            service_role_key=os.environ.get('SUPABASE_SERVICE_ROLE_KEY'),
        )


def create_store(config: StoreConfig) -> SupabaseWaitlistStore:
    """Build the Supabase clients for a config"""
    # These must be set - no defaults for security
    if not config.url or not config.anon_key:
        raise ValueError(
            "Missing required environment variables: SUPABASE_URL and SUPABASE_ANON_KEY must be set. "
            "Please configure these in your environment or .env file."
        )

    client: Client = create_client(config.url, config.anon_key)

    admin_client: Optional[Client] = None
    if config.service_role_key:
        admin_client = create_client(config.url, config.service_role_key)
    else:
        log_warning("SUPABASE_SERVICE_ROLE_KEY not set; database provisioning is unavailable")

    return SupabaseWaitlistStore(client, admin_client)
