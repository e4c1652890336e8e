"""
User model for the Toolkit Service.

Users are provisioned by the identity provider; the table exists so that
`tools.created_by` has a real foreign key target.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from toolkit_service.models.base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "users"

    email = Column(String(64), nullable=False, unique=True)
    role = Column(String(20), nullable=False, default="regular")

    tools = relationship("Tool", back_populates="creator")
