"""
Locale model - a language/region variant
"""
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func

from lexicache.core.database import Base


class Locale(Base):
    """Locale model, primary key is the locale code"""

    __tablename__ = "locales"

    code = Column(String(10), primary_key=True)  # en-US, tr-TR, uk-UA
    native_name = Column(String(255), nullable=False)
    english_name = Column(String(255), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Locale(code={self.code}, english_name={self.english_name})>"
