"""
career_compass/shutdown.py

Shared shutdown flag for graceful termination of the analysis worker.
main.py sets it; the worker loop polls it.
"""

import asyncio

_shutdown_event = asyncio.Event()


def set_shutdown():
    """Signal that the app is shutting down."""
    _shutdown_event.set()


def is_shutting_down() -> bool:
    """Check if the app is shutting down. Used by background tasks."""
    return _shutdown_event.is_set()


def reset_shutdown():
    """Clear the flag so a restarted app (or a test) can run the worker again."""
    _shutdown_event.clear()
