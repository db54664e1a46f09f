# app/models/assets/asset_category.py
import uuid
from sqlalchemy import UUID, Column, ForeignKey, Integer, Numeric, String, Text, TIMESTAMP, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class AssetCategory(Base):
    __tablename__ = "categories"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    parent_id = Column(UUID(as_uuid=True), ForeignKey(
        "categories.id"), nullable=True)

    # inherited by assets created under this category
    default_cost = Column(Numeric(14, 2), nullable=True)
    default_useful_life = Column(Integer, nullable=True)
    default_residual_value = Column(Numeric(14, 2), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    parent = relationship(
        "AssetCategory", remote_side=[id], back_populates="subcategories")
    subcategories = relationship("AssetCategory", back_populates="parent")
    assets = relationship("Asset", back_populates="category")
