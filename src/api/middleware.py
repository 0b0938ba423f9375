"""Shared rate limiter (keyed by client address)."""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

DEFAULT_LIMIT = "100/minute"
# Public geocoders throttle aggressively; keep address lookups well below that
GEOCODE_LIMIT = "30/minute"
