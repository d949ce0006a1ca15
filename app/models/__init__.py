from app.core.db import Base

from .subscription import Subscription

__all__ = [
    "Base",
    "Subscription",
]
