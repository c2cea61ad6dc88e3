"""
Core module - domain models and shared helpers.
"""

from steep.core.models import Brew, Tea, TeaType, UserRecord
from steep.core.utils import generate_id, utc_now

__all__ = [
    "Brew",
    "Tea",
    "TeaType",
    "UserRecord",
    "generate_id",
    "utc_now",
]
