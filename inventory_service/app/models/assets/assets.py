# app/models/assets/assets.py
import uuid
from sqlalchemy import UUID, Column, Date, ForeignKey, Integer, Numeric, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.inventory_enum import AssetStatus


class Asset(Base):
    __tablename__ = "assets"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    category_id = Column(UUID(as_uuid=True), ForeignKey(
        "categories.id"), nullable=False)

    # technical
    brand = Column(String(100))
    model = Column(String(100))
    serial_number = Column(String(100))

    # accounting
    acquisition_cost = Column(Numeric(14, 2))
    purchase_date = Column(Date)
    supplier = Column(String(200))
    useful_life = Column(Integer)
    residual_value = Column(Numeric(14, 2), default=0)

    # location
    building = Column(String(100))
    office = Column(String(100))
    laboratory = Column(String(100))
    location = Column(String(200))
    current_location = Column(String(200))

    status = Column(String(24), nullable=False,
                    default=AssetStatus.AVAILABLE.value)
    assigned_to_id = Column(UUID(as_uuid=True), ForeignKey(
        "users.id"), nullable=True, index=True)
    assigned_at = Column(TIMESTAMP(timezone=True), nullable=True)
    created_by_id = Column(UUID(as_uuid=True), ForeignKey(
        "users.id"), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)

    category = relationship("AssetCategory", back_populates="assets")
    assigned_to = relationship("Users", foreign_keys=[assigned_to_id])
    created_by = relationship("Users", foreign_keys=[created_by_id])

    assignments = relationship(
        "AssetAssignment", back_populates="asset", cascade="all, delete-orphan")
    # ledger rows block deletion of the asset
    movements = relationship(
        "AssetMovement", back_populates="asset", passive_deletes="all")
    maintenances = relationship(
        "Maintenance", back_populates="asset", cascade="all, delete-orphan")
    incidents = relationship(
        "Incident", back_populates="asset", cascade="all, delete-orphan")
