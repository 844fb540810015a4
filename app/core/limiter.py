"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Central limit strings and decorators
keep rate limits DRY.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Single source of truth for rate limit strings and decorators.
SHARE_LIMIT = "30/minute"
SEARCH_LIMIT = "60/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_share = limiter.limit(SHARE_LIMIT)
limit_search = limiter.limit(SEARCH_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
