"""
Business logic services
"""
from lexicache.services.i18n_service import I18nService, interpolate

__all__ = [
    "I18nService",
    "interpolate",
]
