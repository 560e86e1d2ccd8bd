"""
api/limiter.py -- Shared slowapi rate limiter for the RentCar API.

api/main.py mounts it (SlowAPIMiddleware looks for app.state.limiter) and
api/routes/v1/users.py decorates the login route with LOGIN_RATE_LIMIT.
One module-level instance means one counter store; per-module limiters would
each count separately and never trip.

Counters are in-process memory keyed by client IP. Tests call limiter.reset()
to start each module with empty counters.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Password guessing is the only abuse this API throttles.
LOGIN_RATE_LIMIT = "10/minute"

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
