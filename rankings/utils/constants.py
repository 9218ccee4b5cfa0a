"""Common constants."""

from enum import Enum


class Criterion(str, Enum):
    """Closed set of qualitative feedback criteria."""

    COMPENSATION = "compensation"
    CULTURE = "culture"
    WORK_LIFE_BALANCE = "work_life_balance"
    GROWTH = "growth"
    TECH_STACK = "tech_stack"
    LEADERSHIP = "leadership"
    INTERVIEW = "interview"


RATING_CRITERIA = frozenset(c.value for c in Criterion)

# Score bounds for criterion ratings
MIN_RATING_SCORE = 1
MAX_RATING_SCORE = 5

# Category filter value meaning "no restriction"
ALL_CATEGORIES = "all"

# Wire media types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_PROTOBUF = "application/x-protobuf"

# Health payload values
HEALTH_HEALTHY = "healthy"
HEALTH_UNHEALTHY = "unhealthy"
DATABASE_CONNECTED = "connected"
DATABASE_DISCONNECTED = "disconnected"

# Identity columns are PostgreSQL INTEGER; ids outside this range cannot exist
MIN_STORE_ID = 1
MAX_STORE_ID = 2**31 - 1

# Matches the String(255) session_id columns
MAX_SESSION_ID_LENGTH = 255
