"""
Services module for the Career Compass analysis service.
"""

from career_compass.services.cache import get_cache
from career_compass.services.redis_cache import RedisCache
from career_compass.services.snowflake import get_snowflake_connection

__all__ = [
    "get_cache",
    "RedisCache",
    "get_snowflake_connection",
]
