"""FastAPI dependencies: backend handles, AI gateway and the current user."""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Header, HTTPException

from weekfit.infra.Local_Store import LocalStore
from weekfit.infra.supabase_client import create_session_client, is_configured
from weekfit.infra.Auth_Service import AuthService
from weekfit.infra.Profile_Repository import ProfileRepository
from weekfit.infra.Menu_Repository import MenuRepository
from weekfit.infra.Challenge_Repository import ChallengeRepository, DailyChallengeRepository
from weekfit.infra.Achievement_Repository import AchievementRepository
from weekfit.infra.Progress_Repository import ProgressRepository
from weekfit.infra.ai_gateway import AIGateway

logger = logging.getLogger(__name__)


@dataclass
class Backend:
    """Repositories for one request: one Supabase client (None in local mode) and the shared local store.

    ``session_client`` builds the throwaway clients auth calls run on; it defaults
    to ``client`` itself, which is what the in-memory fakes need.
    """
    client: Any = None
    store: LocalStore = field(default_factory=LocalStore)
    session_client: Optional[Callable[[], Any]] = None

    def __post_init__(self):
        self.profiles = ProfileRepository(self.client, self.store)
        self.menus = MenuRepository(self.client, self.store)
        self.challenges = ChallengeRepository(self.client, self.store)
        self.daily_challenges = DailyChallengeRepository(self.client, self.store)
        self.achievements = AchievementRepository(self.client, self.store)
        self.progress = ProgressRepository(self.client, self.store)
        self.auth = AuthService(self.client, self.session_client, self.store)


_store: Optional[LocalStore] = None


def get_store() -> LocalStore:
    global _store
    if _store is None:
        _store = LocalStore()
    return _store


def client_factory() -> Optional[Callable[[Optional[str]], Any]]:
    """Builds a Supabase client for an access token; None in local mode."""
    return create_session_client if is_configured() else None


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_backend(authorization: Optional[str] = Header(default=None)) -> Backend:
    """Backend whose table queries carry the caller's own access token."""
    make_client = client_factory()
    if make_client is None:
        return Backend(store=get_store())
    return Backend(client=make_client(bearer_token(authorization)), store=get_store(),
                   session_client=lambda: make_client(None))


def get_ai_gateway() -> AIGateway:
    return AIGateway()


def get_current_user(authorization: Optional[str] = Header(default=None),
                     backend: Backend = Depends(get_backend)) -> Optional[Dict[str, Any]]:
    """User for the Authorization: Bearer <token> header, None when absent or invalid."""
    token = bearer_token(authorization)
    if token is None:
        return None
    return backend.auth.get_user(token)


def require_user(user: Optional[Dict[str, Any]] = Depends(get_current_user)) -> Dict[str, Any]:
    if not user or not user.get("id"):
        raise HTTPException(status_code=401, detail={"message": "Login required", "login_required": True})
    return user
