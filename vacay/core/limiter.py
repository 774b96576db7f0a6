from slowapi import Limiter
from slowapi.util import get_remote_address

from vacay.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

# Applied to the unauthenticated credential endpoints (/login, /register)
credential_limit = f"{settings.rate_limit_per_minute}/minute"
