# Plagiarism check gateway

from .app import create_app
from .cache import CacheStore
from .client import PlagiarismClient
from .rate_limit import RateLimiter
from .settings import Settings

__all__ = [
    'create_app',
    'CacheStore',
    'PlagiarismClient',
    'RateLimiter',
    'Settings',
]
