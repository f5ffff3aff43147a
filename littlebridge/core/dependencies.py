"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from littlebridge.config import settings
from littlebridge.core.errors import DataAccessError, ErrorKind
from littlebridge.database.supabase_client import get_supabase
from littlebridge.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

# Browsers send the token as an http-only cookie; API clients may use a bearer header
security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Optional[Client] = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
) -> Optional[str]:
    """Access token from the auth cookie, falling back to the Authorization header"""
    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token
    if credentials:
        return credentials.credentials
    return None


def get_current_user(
    token: Optional[str] = Depends(get_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Dict:
    """Resolve the caller's identity: {"id", "email", "role"}"""
    if not token:
        raise DataAccessError(ErrorKind.UNAUTHENTICATED, "Not authenticated")
    return auth_service.resolve_user(token)


def get_optional_user(
    token: Optional[str] = Depends(get_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[Dict]:
    """Identity when a valid token is present, None otherwise (guest access)"""
    if not token:
        return None
    try:
        return auth_service.resolve_user(token)
    except DataAccessError as e:
        # Ignore invalid tokens for optional auth
        logger.debug(f"Ignoring invalid token on optional-auth route: {e.message}")
        return None


def require_role(*roles: str):
    """Factory function to create a role check dependency"""
    def check_role(user_data: Dict = Depends(get_current_user)) -> Dict:
        if user_data["role"] not in roles:
            if roles == ("admin",):
                raise DataAccessError(ErrorKind.FORBIDDEN, "Admin access required")
            raise DataAccessError(
                ErrorKind.FORBIDDEN,
                f"Insufficient permissions. Required role: {' or '.join(roles)}"
            )
        return user_data
    return check_role
