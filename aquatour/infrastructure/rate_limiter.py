"""Rate Limiting — one slowapi Limiter shared by the app and the route decorators.

Invariants:
    - Default limit applies to every route via SlowAPIMiddleware
    - Login and resource creation carry stricter per-route limits
    - Clients are keyed by remote address

Design Decisions:
    - Limits read from Settings at import, like the CORS origins in main.py
    - In-memory storage: single process, no shared limiter state (no Redis)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from aquatour.config import get_settings

_settings = get_settings()

LOGIN_LIMIT = _settings.rate_limit_login
CREATE_LIMIT = _settings.rate_limit_create

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_settings.rate_limit_default],
    enabled=_settings.rate_limit_enabled,
)
