"""
Snowflake Connection - Career Compass
career_compass/services/snowflake.py

Connection factory used by every repository.
"""

import snowflake.connector

from career_compass.config import get_settings


def get_snowflake_connection() -> snowflake.connector.SnowflakeConnection:
    """Open a new Snowflake connection from application settings."""
    settings = get_settings()
    return snowflake.connector.connect(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=settings.SNOWFLAKE_PASSWORD.get_secret_value(),
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
        role=settings.SNOWFLAKE_ROLE,
    )
