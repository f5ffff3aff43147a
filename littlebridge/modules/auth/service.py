import hashlib
import logging
import time
from typing import Callable, Dict, Any, Optional, Tuple

from pydantic import TypeAdapter
from supabase import Client

from littlebridge.config import settings
from littlebridge.core.errors import DataAccessError, ErrorKind, wrap_backend_error
from littlebridge.database import demo_data
from littlebridge.database.schema import ROLES
from littlebridge.database.supabase_client import SupabaseClient
from littlebridge.modules.auth.schemas import Account, SignInRequest, SignUpRequest

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = "id, email, role, preferred_language, is_active, onboarding_completed, created_at, updated_at"
DEMO_TOKEN_PREFIX = "demo:"

_account_adapter = TypeAdapter(Account)

# In-memory cache for resolve_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _auth_error_kind(exc: Exception) -> ErrorKind:
    """Classify a Supabase Auth failure. Auth errors carry a code on recent servers, a message on older ones."""
    code = (getattr(exc, "code", None) or "").lower()
    message = str(exc).lower()
    if code in ("user_already_exists", "email_exists") or "already registered" in message or "already exists" in message:
        return ErrorKind.DUPLICATE
    if code in ("invalid_credentials", "email_not_confirmed") or "invalid" in message or "credentials" in message:
        return ErrorKind.UNAUTHENTICATED
    if "jwt" in message or "expired" in message:
        return ErrorKind.UNAUTHENTICATED
    return ErrorKind.BACKEND


def demo_token(role: str, email: str) -> str:
    return f"{DEMO_TOKEN_PREFIX}{role}:{email}"


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Optional[Client],
                 session_client_factory: Optional[Callable[[], Client]] = None):
        self.supabase = supabase
        # sign-in state lives on a throwaway client; self.supabase keeps the anon key
        self.session_client_factory = session_client_factory or SupabaseClient.create_session_client

    @property
    def demo(self) -> bool:
        return self.supabase is None

    def sign_up(self, data: SignUpRequest) -> Tuple[Account, Optional[str]]:
        """Register with Supabase Auth and create the profiles row. Returns (account, access_token)."""
        if self.demo:
            profile = demo_data.demo_account(data.email, data.role)
            profile.update({"onboarding_completed": False, "preferred_language": data.preferred_language})
            return self._to_account(profile), demo_token(data.role, data.email)

        try:
            existing = self.supabase.table("profiles")\
                .select("id")\
                .eq("email", data.email)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Sign up")
        if existing.data:
            raise DataAccessError(ErrorKind.DUPLICATE, "Email already registered")

        try:
            auth_response = self.session_client_factory().auth.sign_up({
                "email": data.email,
                "password": data.password,
                "options": {
                    "data": {"role": data.role}
                }
            })
        except Exception as e:
            kind = _auth_error_kind(e)
            if kind == ErrorKind.DUPLICATE:
                raise DataAccessError(kind, "Email already registered")
            logger.error(f"Sign up failed for {data.email}: {e}")
            raise DataAccessError(ErrorKind.BACKEND, f"Sign up failed: {e}")

        if not auth_response.user:
            raise DataAccessError(ErrorKind.BACKEND, "Failed to register user")

        profile_row = {
            "id": auth_response.user.id,
            "email": data.email,
            "role": data.role,
            "preferred_language": data.preferred_language,
        }
        try:
            # upsert: a database trigger may already have created the row
            result = self.supabase.table("profiles")\
                .upsert(profile_row, on_conflict="id")\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Create profile", {
                ErrorKind.DUPLICATE: "Email already registered",
            })
        profile = result.data[0] if result.data else profile_row

        token = auth_response.session.access_token if auth_response.session else None
        return self._to_account(profile), token

    def sign_in(self, data: SignInRequest) -> Tuple[Account, str]:
        """Authenticate with Supabase Auth. Returns (account, access_token)."""
        if self.demo:
            # any credentials are accepted in demo mode
            profile = demo_data.demo_account(data.email)
            return self._to_account(profile), demo_token(profile["role"], data.email)

        try:
            auth_response = self.session_client_factory().auth.sign_in_with_password({
                "email": data.email,
                "password": data.password
            })
        except Exception as e:
            if _auth_error_kind(e) == ErrorKind.UNAUTHENTICATED:
                raise DataAccessError(ErrorKind.UNAUTHENTICATED, "Invalid email or password")
            logger.error(f"Sign in failed for {data.email}: {e}")
            raise DataAccessError(ErrorKind.BACKEND, "Sign in failed")

        if not auth_response.user or not auth_response.session:
            raise DataAccessError(ErrorKind.UNAUTHENTICATED, "Invalid email or password")

        profile = self._get_profile(auth_response.user.id)
        if not profile.get("is_active", True):
            raise DataAccessError(ErrorKind.FORBIDDEN, "Account is deactivated")

        return self.get_account({"id": auth_response.user.id}, profile), auth_response.session.access_token

    def sign_out(self) -> bool:
        """
        Nothing to revoke server-side: sessions only ever lived on per-call clients
        and access tokens are stateless JWTs. The route clears the cookie.
        """
        return True

    def send_password_reset(self, email: str, redirect_to: Optional[str] = None) -> bool:
        if self.demo:
            return True
        try:
            self.session_client_factory().auth.reset_password_for_email(
                email, {"redirect_to": redirect_to or settings.password_reset_redirect_url}
            )
            return True
        except Exception as e:
            logger.error(f"Password reset e-mail failed for {email}: {e}")
            raise DataAccessError(ErrorKind.BACKEND, "Could not send password reset e-mail")

    def resend_verification(self, email: str) -> bool:
        if self.demo:
            return True
        try:
            self.session_client_factory().auth.resend({"type": "signup", "email": email})
            return True
        except Exception as e:
            logger.error(f"Resend verification failed for {email}: {e}")
            raise DataAccessError(ErrorKind.BACKEND, "Could not resend verification e-mail")

    def resolve_user(self, token: str) -> Dict[str, Any]:
        """Identity behind an access token: {"id", "email", "role"}. Uses short TTL cache."""
        if token.startswith(DEMO_TOKEN_PREFIX):
            if not self.demo:
                raise DataAccessError(ErrorKind.UNAUTHENTICATED, "Invalid token")
            role, _, email = token[len(DEMO_TOKEN_PREFIX):].partition(":")
            if role not in ROLES or not email:
                raise DataAccessError(ErrorKind.UNAUTHENTICATED, "Invalid token")
            return {"id": demo_data.demo_user_id(role), "email": email, "role": role}
        if self.demo:
            raise DataAccessError(ErrorKind.UNAUTHENTICATED, "Invalid token")

        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        if cache_key in _AUTH_USER_CACHE:
            user_data, expiry = _AUTH_USER_CACHE[cache_key]
            if now < expiry:
                return user_data
            del _AUTH_USER_CACHE[cache_key]

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            logger.debug(f"Token rejected: {e}")
            raise DataAccessError(ErrorKind.UNAUTHENTICATED, "Invalid token")
        if not user_response or not user_response.user:
            raise DataAccessError(ErrorKind.UNAUTHENTICATED, "Invalid token")

        user = user_response.user
        profile = self._get_profile(user.id)
        if not profile.get("is_active", True):
            raise DataAccessError(ErrorKind.FORBIDDEN, "Account is deactivated")
        user_data = {"id": user.id, "email": user.email, "role": profile["role"]}
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
        return user_data

    def get_account(self, user: Dict[str, Any], profile: Optional[Dict[str, Any]] = None) -> Account:
        """Profile plus its role-specific extension record"""
        if self.demo:
            return self.get_demo_account(user)
        user_id = user["id"]
        profile = dict(profile or self._get_profile(user_id))
        extension_table = {"family": ("family_profile", "family_profiles", "*"),
                           "center": ("center_profile", "center_profiles", "*, center_photos(*)")}
        if profile["role"] in extension_table:
            key, table, columns = extension_table[profile["role"]]
            try:
                result = self.supabase.table(table)\
                    .select(columns)\
                    .eq("user_id", user_id)\
                    .limit(1)\
                    .execute()
            except Exception as e:
                raise wrap_backend_error(e, "Account lookup")
            profile[key] = result.data[0] if result.data else None
        return self._to_account(profile)

    def get_demo_account(self, user: Dict[str, Any]) -> Account:
        profile = demo_data.demo_account(user["email"], user["role"])
        if user["role"] == "family":
            profile["family_profile"] = demo_data.family_profile()
        elif user["role"] == "center":
            profile["center_profile"] = demo_data.centers()[0]
        return self._to_account(profile)

    def _get_profile(self, user_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table("profiles")\
                .select(PROFILE_COLUMNS)\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise wrap_backend_error(e, "Profile lookup")
        if not result.data:
            raise DataAccessError(ErrorKind.NOT_FOUND, "User not found")
        return result.data[0]

    @staticmethod
    def _to_account(profile: Dict[str, Any]) -> Account:
        return _account_adapter.validate_python(profile)
