"""
Translation model - one (locale, key) -> value entry
"""
from sqlalchemy import Column, String, Text, ForeignKey

from lexicache.core.database import Base


class Translation(Base):
    """Translation entry, unique per locale and key"""

    __tablename__ = "keys"

    key = Column(String(255), primary_key=True)  # message.welcome, button.start, etc.
    locale_id = Column(
        String(10),
        ForeignKey("locales.code", ondelete="CASCADE"),
        primary_key=True,
    )
    value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Translation(key={self.key}, locale_id={self.locale_id})>"
