from uuid import uuid4

import pytest

from shared.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from shared.core.schemas import CommonQueryParams
from inventory_service.app.crud.assets import asset_category_crud as crud
from inventory_service.app.models.assets.asset_category import AssetCategory
from inventory_service.app.schemas.assets.asset_category_schemas import AssetCategoryCreate, AssetCategoryUpdate


def _exists(db, category_id):
    return db.query(AssetCategory).filter(AssetCategory.id == category_id).first() is not None


class TestDelete:

    def test_delete_empty_leaf(self, db, make_category):
        leaf = make_category(name="Cables")

        crud.delete_asset_category(db, leaf.id)

        assert not _exists(db, leaf.id)

    def test_delete_with_direct_assets_conflicts(self, db, category, make_asset):
        make_asset(code="C1")

        with pytest.raises(ConflictError):
            crud.delete_asset_category(db, category.id)

        assert _exists(db, category.id)

    def test_delete_with_subcategory_holding_asset_conflicts(self, db, make_category, make_asset):
        parent = make_category(name="Furniture")
        child = make_category(name="Chairs", parent=parent)
        make_asset(code="CH-1", category_obj=child)

        with pytest.raises(ConflictError):
            crud.delete_asset_category(db, parent.id)

        assert _exists(db, parent.id)
        assert _exists(db, child.id)

    def test_delete_removes_empty_subcategories(self, db, make_category):
        parent = make_category(name="Tools")
        child_a = make_category(name="Drills", parent=parent)
        child_b = make_category(name="Saws", parent=parent)

        result = crud.delete_asset_category(db, parent.id)

        assert result == {"deleted_subcategories": 2}
        for category_id in (parent.id, child_a.id, child_b.id):
            assert not _exists(db, category_id)

    def test_delete_unknown(self, db):
        with pytest.raises(NotFoundError):
            crud.delete_asset_category(db, uuid4())


class TestCreateUpdate:

    def test_create_duplicate_name(self, db, category):
        with pytest.raises(ConflictError):
            crud.create_asset_category(db, AssetCategoryCreate(name="computers"))

    def test_parent_must_exist(self, db):
        with pytest.raises(InvalidInputError):
            crud.create_asset_category(db, AssetCategoryCreate(name="Orphan", parent_id=uuid4()))

    def test_depth_is_capped_at_two(self, db, make_category):
        root = make_category(name="Root")
        child = make_category(name="Child", parent=root)

        with pytest.raises(InvalidInputError):
            crud.create_asset_category(db, AssetCategoryCreate(name="Grandchild", parent_id=child.id))

    def test_cannot_be_own_parent(self, db, category):
        with pytest.raises(InvalidInputError):
            crud.update_asset_category(db, category.id, AssetCategoryUpdate(parent_id=category.id))

    def test_category_with_children_cannot_get_parent(self, db, make_category):
        first = make_category(name="First")
        make_category(name="First child", parent=first)
        second = make_category(name="Second")

        with pytest.raises(InvalidInputError):
            crud.update_asset_category(db, first.id, AssetCategoryUpdate(parent_id=second.id))

    def test_rename(self, db, category):
        result = crud.update_asset_category(db, category.id, AssetCategoryUpdate(name="Laptops"))
        assert result.name == "Laptops"


class TestReads:

    def test_list_counts_assets(self, db, category, make_category, make_asset):
        make_category(name="Empty")
        make_asset(code="L1")
        make_asset(code="L2")

        result = crud.get_asset_categories(db, CommonQueryParams())

        counts = {c.name: c.asset_count for c in result["categories"]}
        assert result["total"] == 2
        assert counts == {"Computers": 2, "Empty": 0}

    def test_get_with_assets(self, db, category, make_asset):
        make_asset(code="G1")

        result = crud.get_asset_category_by_id(db, category.id)

        assert [a.code for a in result.assets] == ["G1"]
        assert result.asset_count == 1

    def test_defaults_fall_back_to_parent(self, db, make_category):
        parent = make_category(name="Vehicles", default_cost=20000, default_useful_life=8)
        child = make_category(name="Vans", parent=parent, default_useful_life=5)

        defaults = crud.get_category_defaults(db, child.id)

        assert defaults.useful_life == 5
        assert defaults.acquisition_cost == 20000
        assert defaults.inherited_from == parent.id
        assert defaults.residual_value is None
