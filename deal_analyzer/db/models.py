"""
SQLAlchemy ORM models for saved deals.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Float,
    Boolean,
    DateTime,
    JSON,
)
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class AuditMixin:
    """Mixin for audit fields on all models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    is_deleted = Column(Boolean, default=False, nullable=False)


class Deal(AuditMixin, Base):
    """
    A saved deal: the property input and its analysis, stored together.

    Input and analysis are opaque JSON documents; only the fields needed
    for listing and filtering are broken out into columns.
    """

    __tablename__ = "deals"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    property_type = Column(String(10), nullable=False, index=True)  # "SFR" or "MF"

    # Address
    address_street = Column(String(255))
    address_city = Column(String(100))
    address_state = Column(String(50))
    address_zip = Column(String(20))

    purchase_price = Column(Float)

    # Request payload as submitted (property fields + long-term assumptions)
    property_data = Column(JSON, default=dict)

    # Serialized AnalysisResult and insights (cached)
    analysis = Column(JSON, default=dict)
    insights = Column(JSON, nullable=True)
