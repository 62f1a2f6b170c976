from .base import RecordRepository
from .users import UserRepository

__all__ = [
    "RecordRepository",
    "UserRepository",
]
