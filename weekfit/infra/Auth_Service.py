"""Thin wrappers over the hosted auth provider (Supabase GoTrue).

Sign-up, sign-in and sign-out run on a throwaway client from ``session_client``:
a Supabase client that signs in starts sending that user's token on every
query, so it must never be the one serving other users' requests.

Without a configured backend the service runs in local mode: accounts live in
the local store with a bcrypt password hash, and sign-in issues a random
bearer token that is only accepted until sign-out.
"""
import logging
import secrets
import uuid
from typing import Any, Callable, Dict, Optional

import bcrypt

from weekfit.domain.Profile import Profile
from weekfit.infra.Local_Store import LocalStore

logger = logging.getLogger(__name__)

LOCAL_USERS_KEY = "auth_users"
LOCAL_TOKENS_KEY = "auth_tokens"


class AuthError(Exception):
    """Sign-up/sign-in rejected by the provider."""


def _user_dict(user: Any) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    if isinstance(user, dict):
        return {"id": user.get("id"), "email": user.get("email"),
                "user_metadata": user.get("user_metadata") or {}}
    return {
        "id": str(getattr(user, "id", "")),
        "email": getattr(user, "email", "") or "",
        "user_metadata": getattr(user, "user_metadata", None) or {},
    }


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.error("Stored password hash is malformed")
        return False


class AuthService:
    def __init__(self, client: Any = None, session_client: Optional[Callable[[], Any]] = None,
                 store: Optional[LocalStore] = None):
        self.client = client
        self._session_client = session_client or (lambda: client)
        self.store = store or LocalStore()

    @property
    def local(self) -> bool:
        return self.client is None

    # === Local mode ===
    def _local_users(self) -> Dict[str, Dict[str, Any]]:
        return self.store.get(LOCAL_USERS_KEY) or {}

    def _local_tokens(self) -> Dict[str, str]:
        return self.store.get(LOCAL_TOKENS_KEY) or {}

    @staticmethod
    def _local_public(record: Dict[str, Any]) -> Dict[str, Any]:
        return {"id": record["id"], "email": record["email"],
                "user_metadata": {"full_name": record.get("full_name", "")}}

    def _local_sign_up(self, email: str, password: str, full_name: str) -> Dict[str, Any]:
        users = self._local_users()
        if email in users:
            raise AuthError("User already registered")
        record = {"id": str(uuid.uuid4()), "email": email, "full_name": full_name,
                  "password_hash": hash_password(password)}
        users[email] = record
        self.store.set(LOCAL_USERS_KEY, users)
        logger.info("Created local account %s", record["id"])
        return {"user": self._local_public(record), "session": None}

    def _local_sign_in(self, email: str, password: str) -> Dict[str, Any]:
        record = self._local_users().get(email)
        if record is None or not check_password(password, record.get("password_hash", "")):
            raise AuthError("Invalid login credentials")
        token = secrets.token_urlsafe(32)
        tokens = self._local_tokens()
        tokens[token] = record["id"]
        self.store.set(LOCAL_TOKENS_KEY, tokens)
        return {"user": self._local_public(record),
                "session": {"access_token": token, "refresh_token": None, "expires_in": None}}

    def _local_get_user(self, token: str) -> Optional[Dict[str, Any]]:
        user_id = self._local_tokens().get(token)
        if user_id is None:
            return None
        record = next((r for r in self._local_users().values() if r["id"] == user_id), None)
        return self._local_public(record) if record else None

    def _local_sign_out(self, token: str) -> None:
        tokens = self._local_tokens()
        if tokens.pop(token, None) is not None:
            self.store.set(LOCAL_TOKENS_KEY, tokens)

    # === Public API ===
    def sign_up(self, email: str, password: str, full_name: str = "") -> Dict[str, Any]:
        if self.local:
            return self._local_sign_up(email, password, full_name)
        auth_client = self._session_client()
        try:
            res = auth_client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"full_name": full_name}},
            })
        except Exception as e:
            logger.warning("Sign-up failed for %s: %s", email, e)
            raise AuthError(str(e)) from e
        user = _user_dict(getattr(res, "user", None))
        if user:
            # The profile row is created eagerly; failure is not fatal (created on first dashboard load)
            try:
                profile = Profile.default(user)
                profile.full_name = full_name or profile.full_name
                auth_client.table("profiles").insert(profile.to_dict()).execute()
            except Exception:
                logger.exception("Failed to create profile row for %s", user["id"])
        return {"user": user, "session": self._session_dict(getattr(res, "session", None))}

    def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        if self.local:
            return self._local_sign_in(email, password)
        try:
            res = self._session_client().auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.info("Sign-in rejected for %s: %s", email, e)
            raise AuthError(str(e)) from e
        return {"user": _user_dict(getattr(res, "user", None)),
                "session": self._session_dict(getattr(res, "session", None))}

    def sign_out(self, token: Optional[str]) -> None:
        """Revoke the caller's own session; other users' sessions are untouched."""
        if not token:
            return
        if self.local:
            self._local_sign_out(token)
            return
        try:
            self._session_client().auth.admin.sign_out(token)
        except Exception:
            logger.exception("Sign-out failed")

    def get_user(self, token: str) -> Optional[Dict[str, Any]]:
        """Resolve a bearer token to the user, None when invalid or expired."""
        if not token:
            return None
        if self.local:
            return self._local_get_user(token)
        try:
            res = self.client.auth.get_user(token)
        except Exception as e:
            logger.info("Token rejected: %s", e)
            return None
        return _user_dict(getattr(res, "user", None))

    @staticmethod
    def _session_dict(session: Any) -> Optional[Dict[str, Any]]:
        if session is None:
            return None
        return {
            "access_token": getattr(session, "access_token", None),
            "refresh_token": getattr(session, "refresh_token", None),
            "expires_in": getattr(session, "expires_in", None),
        }
