"""Shared slowapi limiter.

``SlowAPIMiddleware`` in ``main.py`` applies ``settings.RATE_LIMITS`` to every
route per client address; handlers that need a tighter window, such as
login, add ``@limiter.limit(...)`` on top.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from hr_api.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=settings.rate_limits_list,
    enabled=settings.RATE_LIMIT_ENABLED,
    headers_enabled=False,
)
