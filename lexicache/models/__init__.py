"""
SQLAlchemy models
"""
from lexicache.models.locale import Locale
from lexicache.models.translation import Translation

__all__ = [
    "Locale",
    "Translation",
]

# Import Base for metadata.create_all
from lexicache.core.database import Base
