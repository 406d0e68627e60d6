import logging
from typing import Optional

from supabase import Client, ClientOptions, create_client

from weekfit.utilities.config import SUPABASE_URL, SUPABASE_ANON_KEY

logger = logging.getLogger(__name__)


def is_configured() -> bool:
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)


def create_session_client(access_token: Optional[str] = None) -> Optional[Client]:
    """Fresh Supabase client for one caller, or None when the backend is not configured (local mode).

    Table queries run with ``access_token`` (anon key when None). Clients are never
    shared between requests: sign-in/sign-out rewrite the client's Authorization header.
    """
    if not is_configured():
        return None
    options = ClientOptions(auto_refresh_token=False, persist_session=False)
    if access_token:
        options.headers["Authorization"] = f"Bearer {access_token}"
    return create_client(SUPABASE_URL, SUPABASE_ANON_KEY, options=options)


if not is_configured():
    logger.warning("SUPABASE_URL/SUPABASE_ANON_KEY not set; running with the local store only.")
