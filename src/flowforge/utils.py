"""
FlowForge Utilities Module

This module contains shared utility functions used throughout the FlowForge application:
timestamps, identifier generation and small string helpers.
"""

import logging
import random
import string
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

# Set up module logger
logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


# ====================================================================
# Timestamp Utilities
# ====================================================================

def get_datetime_now() -> datetime:
    """
    Get current timezone-aware UTC datetime.
    
    Returns:
        Current datetime in UTC
    """
    return datetime.now(timezone.utc)


def get_timestamp() -> str:
    """
    Get current ISO-formatted UTC timestamp string.
    
    Returns:
        ISO-formatted timestamp string
    """
    return get_datetime_now().isoformat()


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp, accepting the trailing 'Z' form browsers write.
    
    Args:
        value: Timestamp string
        
    Returns:
        Aware datetime, or None if the string cannot be parsed
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable timestamp: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def next_timestamp(previous: Optional[str], now: str) -> str:
    """
    Return a timestamp that is strictly later than ``previous``.
    
    ``now`` is used as-is unless the clock has not moved past ``previous``
    (same microsecond, or a clock step backwards), in which case the
    previous value plus one microsecond is returned.
    
    Args:
        previous: The timestamp being replaced, if any
        now: The freshly generated timestamp
        
    Returns:
        ISO-formatted timestamp string
    """
    previous_dt = parse_timestamp(previous) if previous else None
    now_dt = parse_timestamp(now)
    if previous_dt is None or now_dt is None or now_dt > previous_dt:
        return now
    return (previous_dt + timedelta(microseconds=1)).isoformat()


# ====================================================================
# Identifier Utilities
# ====================================================================

def generate_id(prefix: str) -> str:
    """
    Generate a time+random based identifier.
    
    Args:
        prefix: Entity prefix such as 'flow', 'step' or 'task'
        
    Returns:
        Identifier in format: {prefix}-{epoch_ms}-{7 random base36 chars}
    """
    suffix = "".join(random.choices(_ID_ALPHABET, k=7))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


# ====================================================================
# String Utilities
# ====================================================================

def truncate_string(text: str, max_length: int = 30, suffix: str = "...") -> str:
    """
    Truncate a string to the given length, appending a suffix when cut.
    
    Args:
        text: String to truncate
        max_length: Number of characters kept from the original
        suffix: Appended when the string was shortened
        
    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix
