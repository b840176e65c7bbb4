"""
Configuration package for the feedback portal.
"""

from .settings import Settings
from .constants import (
    SUBJECTS,
    CATEGORIES,
    FEEDBACK_TEXT_SOFT_LIMIT,
    POSITIVE_KEYWORDS,
    NEGATIVE_KEYWORDS,
)

__all__ = [
    "Settings",
    "SUBJECTS",
    "CATEGORIES",
    "FEEDBACK_TEXT_SOFT_LIMIT",
    "POSITIVE_KEYWORDS",
    "NEGATIVE_KEYWORDS",
]
