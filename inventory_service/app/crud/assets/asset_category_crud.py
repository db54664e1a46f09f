import logging
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.database import atomic
from shared.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from shared.core.schemas import CommonQueryParams, Lookup
from ...models.assets.asset_category import AssetCategory
from ...models.assets.assets import Asset
from ...schemas.assets.asset_category_schemas import (
    AssetCategoryCreate, AssetCategoryDetailOut, AssetCategoryOut, AssetCategoryUpdate, CategoryDefaultsOut)

logger = logging.getLogger(__name__)


def get_category_or_404(db: Session, category_id: UUID) -> AssetCategory:
    category = db.query(AssetCategory).filter(
        AssetCategory.id == category_id).first()
    if not category:
        raise NotFoundError("Category", category_id)
    return category


def _asset_count(db: Session, category_id: UUID) -> int:
    return db.query(func.count(Asset.id)).filter(Asset.category_id == category_id).scalar() or 0


def _to_out(db: Session, category: AssetCategory) -> AssetCategoryOut:
    out = AssetCategoryOut.model_validate(category)
    out.asset_count = _asset_count(db, category.id)
    out.subcategory_count = len(category.subcategories)
    return out


def get_asset_categories(db: Session, params: CommonQueryParams):
    category_query = db.query(AssetCategory)

    if params.search:
        category_query = category_query.filter(
            AssetCategory.name.ilike(f"%{params.search}%"))

    total = category_query.with_entities(func.count(AssetCategory.id)).scalar()

    categories = (
        category_query
        .order_by(AssetCategory.name.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"categories": [_to_out(db, c) for c in categories], "total": total}


def get_asset_category_by_id(db: Session, category_id: UUID) -> AssetCategoryDetailOut:
    category = get_category_or_404(db, category_id)
    out = AssetCategoryDetailOut.model_validate(category)
    out.asset_count = len(category.assets)
    out.subcategory_count = len(category.subcategories)
    return out


def get_asset_category_lookup(db: Session) -> List[Lookup]:
    categories = (
        db.query(AssetCategory.id, AssetCategory.name)
        .order_by(AssetCategory.name.asc())
        .all()
    )
    return [Lookup(id=c.id, name=c.name) for c in categories]


def _validate_parent(db: Session, parent_id: UUID, category_id: Optional[UUID] = None) -> AssetCategory:
    if category_id is not None and parent_id == category_id:
        raise InvalidInputError("A category cannot be its own parent")

    parent = db.query(AssetCategory).filter(
        AssetCategory.id == parent_id).first()
    if not parent:
        raise InvalidInputError("Parent category does not exist",
                                {"parent_id": str(parent_id)})
    if parent.parent_id is not None:
        # tree depth is capped at two levels
        raise InvalidInputError("Parent category must be a top-level category",
                                {"parent_id": str(parent_id)})
    return parent


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[UUID] = None):
    query = db.query(AssetCategory).filter(
        func.lower(AssetCategory.name) == func.lower(name))
    if exclude_id is not None:
        query = query.filter(AssetCategory.id != exclude_id)
    if query.first():
        raise ConflictError(f"Category with name '{name}' already exists")


def create_asset_category(db: Session, category: AssetCategoryCreate) -> AssetCategoryOut:
    _ensure_unique_name(db, category.name)
    if category.parent_id:
        _validate_parent(db, category.parent_id)

    with atomic(db):
        db_category = AssetCategory(**category.model_dump())
        db.add(db_category)

    db.refresh(db_category)
    logger.info("Category %s (%s) created", db_category.id, db_category.name)
    return _to_out(db, db_category)


def update_asset_category(db: Session, category_id: UUID, category: AssetCategoryUpdate) -> AssetCategoryOut:
    db_category = get_category_or_404(db, category_id)
    update_data = category.model_dump(exclude_unset=True)

    if update_data.get("name"):
        _ensure_unique_name(db, update_data["name"], exclude_id=category_id)

    if update_data.get("parent_id"):
        _validate_parent(db, update_data["parent_id"], category_id)
        if db_category.subcategories:
            raise InvalidInputError(
                "A category with subcategories cannot be moved under a parent")

    with atomic(db):
        for field, value in update_data.items():
            setattr(db_category, field, value)

    db.refresh(db_category)
    return _to_out(db, db_category)


def delete_asset_category(db: Session, category_id: UUID) -> Dict[str, int]:
    """Delete a category and its empty subcategories.

    Refused while the category or any of its subcategories still has assets.
    The category row is locked for the check so the guard and the delete
    happen in one transaction.
    """
    with atomic(db):
        db_category = (
            db.query(AssetCategory)
            .filter(AssetCategory.id == category_id)
            .with_for_update()
            .first()
        )
        if not db_category:
            raise NotFoundError("Category", category_id)

        direct_assets = _asset_count(db, category_id)
        if direct_assets > 0:
            raise ConflictError(
                f"Cannot delete category. It has {direct_assets} assets. "
                "Please reassign or delete assets first.",
                {"assets": direct_assets})

        children = db_category.subcategories
        child_ids = [child.id for child in children]
        if child_ids:
            child_assets = (
                db.query(func.count(Asset.id))
                .filter(Asset.category_id.in_(child_ids))
                .scalar()
            ) or 0
            if child_assets > 0:
                raise ConflictError(
                    f"Cannot delete category. Its subcategories have {child_assets} assets.",
                    {"assets": child_assets})

        for child in children:
            db.delete(child)
        # children must be gone before the parent row they reference
        db.flush()
        db.expire(db_category, ["subcategories"])
        db.delete(db_category)

    logger.info("Category %s deleted with %d subcategories",
                category_id, len(child_ids))
    return {"deleted_subcategories": len(child_ids)}


def get_category_defaults(db: Session, category_id: UUID) -> CategoryDefaultsOut:
    category = get_category_or_404(db, category_id)
    parent = category.parent

    values = {}
    inherited_from = None
    for out_field, field in (
        ("acquisition_cost", "default_cost"),
        ("useful_life", "default_useful_life"),
        ("residual_value", "default_residual_value"),
    ):
        value = getattr(category, field)
        if value is None and parent is not None:
            value = getattr(parent, field)
            if value is not None:
                inherited_from = parent.id
        values[out_field] = value

    return CategoryDefaultsOut(category_id=category.id, inherited_from=inherited_from, **values)
