# core/authorization.py
from fastapi import Depends
from core.dependencies import get_current_user, CurrentUser
from core.exceptions import ForbiddenError
from utils.logger import get_logger

logger = get_logger("Authorization")

ROLE_LABELS = {
    "customer": "customers",
    "restaurant_owner": "restaurant owners",
    "admin": "admins",
}

def require_role(*allowed_roles):
    """Dependency factory: the caller's token role must be one of allowed_roles."""
    allowed_labels = " or ".join(ROLE_LABELS.get(r, r) for r in allowed_roles)

    async def _dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in allowed_roles:
            logger.warning(f"Forbidden: {current_user.id} role {current_user.role} not in allowed {allowed_roles}")
            raise ForbiddenError(f"Only {allowed_labels} can access this resource")
        return current_user
    return _dependency
