from slowapi import Limiter
from slowapi.util import get_remote_address

# Shared by every mutating route so one counter store covers the whole app
limiter = Limiter(key_func=get_remote_address)
