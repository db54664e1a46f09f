"""HTTP surface of the inventory service: envelope, status codes, role gating."""

from uuid import uuid4

from shared.utils.app_status_code import AppStatusCode
from inventory_service.app.enum.inventory_enum import AssetStatus


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["data"] == {"status": "healthy"}


def test_missing_token_is_rejected(client):
    response = client.get("/api/assets/")
    assert response.status_code in (401, 403)


def test_garbage_token_is_rejected(client):
    response = client.get("/api/assets/", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_inactive_user_is_rejected(client, make_user, auth_headers):
    inactive = make_user(is_active=False)

    response = client.get("/api/assets/", headers=auth_headers(inactive))

    assert response.status_code == 403
    assert response.json()["status_code"] == AppStatusCode.AUTHENTICATION_USER_INACTIVE


def test_list_is_wrapped(client, asset, responsible, auth_headers):
    response = client.get("/api/assets/", headers=auth_headers(responsible))

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["total"] == 1
    assert body["data"]["assets"][0]["code"] == asset.code


def test_create_asset_requires_write_role(client, category, responsible, manager, auth_headers):
    payload = {"code": "API-1", "name": "Desk", "category_id": str(category.id)}

    denied = client.post("/api/assets/", json=payload, headers=auth_headers(responsible))
    assert denied.status_code == 403
    assert denied.json()["status_code"] == AppStatusCode.AUTHORIZATION_FORBIDDEN

    created = client.post("/api/assets/", json=payload, headers=auth_headers(manager))
    assert created.status_code == 200
    assert created.json()["success"] is True
    assert created.json()["status_code"] == AppStatusCode.CREATED_SUCCESSFULLY
    assert created.json()["data"]["code"] == "API-1"

    duplicate = client.post("/api/assets/", json=payload, headers=auth_headers(manager))
    assert duplicate.status_code == 400
    assert duplicate.json()["status_code"] == AppStatusCode.CONFLICT


def test_not_found_envelope(client, manager, auth_headers):
    response = client.get(f"/api/assets/{uuid4()}", headers=auth_headers(manager))

    body = response.json()
    assert response.status_code == 404
    assert body["success"] is False
    assert body["status_code"] == AppStatusCode.DATA_NOT_FOUND
    assert body["error"] == "Asset not found"


def test_validation_error_envelope(client, manager, auth_headers):
    response = client.post("/api/assignments/", json={"asset_id": "nope"}, headers=auth_headers(manager))

    assert response.status_code == 422
    assert response.json()["status_code"] == AppStatusCode.INVALID_INPUT


def test_assignment_flow(client, asset, responsible, other_responsible, manager, auth_headers):
    headers = auth_headers(manager)

    assigned = client.post("/api/assignments/", json={
        "asset_id": str(asset.id),
        "assigned_to_id": str(responsible.id),
        "location": "Lab 1",
    }, headers=headers)
    assert assigned.status_code == 200
    assert assigned.json()["data"]["status"] == "ACTIVE"

    again = client.post("/api/assignments/", json={
        "asset_id": str(asset.id),
        "assigned_to_id": str(other_responsible.id),
    }, headers=headers)
    assert again.status_code == 400
    assert again.json()["status_code"] == AppStatusCode.CONFLICT

    same_holder = client.post(f"/api/assignments/{asset.id}/transfer", json={
        "new_assigned_to_id": str(responsible.id),
    }, headers=headers)
    assert same_holder.status_code == 400
    assert same_holder.json()["status_code"] == AppStatusCode.CONFLICT

    transferred = client.post(f"/api/assignments/{asset.id}/transfer", json={
        "new_assigned_to_id": str(other_responsible.id),
    }, headers=headers)
    assert transferred.status_code == 200
    assert transferred.json()["data"]["assigned_to_id"] == str(other_responsible.id)

    returned = client.post(f"/api/assignments/{asset.id}/return", headers=headers)
    assert returned.status_code == 200
    assert returned.json()["data"]["status"] == "RETURNED"

    history = client.get("/api/assignments/", params={"asset_id": str(asset.id)}, headers=headers)
    assert [a["status"] for a in history.json()["data"]] == ["RETURNED", "TRANSFERRED"]

    active = client.get("/api/assignments/active", headers=headers)
    assert active.json()["data"] == []

    again_returned = client.post(f"/api/assignments/{asset.id}/return", headers=headers)
    assert again_returned.status_code == 400
    assert again_returned.json()["status_code"] == AppStatusCode.INVALID_STATE


def test_asset_responsible_cannot_assign(client, asset, responsible, auth_headers):
    response = client.post("/api/assignments/", json={
        "asset_id": str(asset.id),
        "assigned_to_id": str(responsible.id),
    }, headers=auth_headers(responsible))

    assert response.status_code == 403


def test_asset_responsible_can_report_incident(client, asset, responsible, auth_headers):
    response = client.post("/api/incidents/", json={
        "asset_id": str(asset.id),
        "type": "ROBO",
        "description": "Stolen from car",
    }, headers=auth_headers(responsible))

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "REPORTED"

    detail = client.get(f"/api/assets/{asset.id}", headers=auth_headers(responsible))
    assert detail.json()["data"]["status"] == AssetStatus.DECOMMISSIONED.value

    investigate = client.post(
        f"/api/incidents/{response.json()['data']['id']}/investigate", headers=auth_headers(responsible))
    assert investigate.status_code == 403


def test_category_delete_guard(client, category, make_category, make_asset, admin, manager, auth_headers):
    child = make_category(name="Ultrabooks", parent=category)
    make_asset(code="U1", category_obj=child)

    manager_delete = client.delete(f"/api/categories/{category.id}", headers=auth_headers(manager))
    assert manager_delete.status_code == 403

    blocked = client.delete(f"/api/categories/{category.id}", headers=auth_headers(admin))
    assert blocked.status_code == 400
    assert blocked.json()["status_code"] == AppStatusCode.CONFLICT

    still_there = client.get(f"/api/categories/{child.id}", headers=auth_headers(admin))
    assert still_there.status_code == 200


def test_maintenance_endpoints(client, asset, manager, auth_headers):
    headers = auth_headers(manager)

    scheduled = client.post("/api/maintenance/", json={
        "asset_id": str(asset.id),
        "type": "CORRECTIVO",
        "scheduled_date": "2099-01-01T09:00:00Z",
        "description": "Replace battery",
    }, headers=headers)
    assert scheduled.status_code == 200
    maintenance_id = scheduled.json()["data"]["id"]

    premature = client.post(f"/api/maintenance/{maintenance_id}/complete", headers=headers)
    assert premature.status_code == 400
    assert premature.json()["data"]["required"] == "IN_PROGRESS"

    started = client.post(f"/api/maintenance/{maintenance_id}/start", headers=headers)
    assert started.json()["data"]["status"] == "IN_PROGRESS"

    completed = client.post(f"/api/maintenance/{maintenance_id}/complete",
                            json={"cost": 45.5}, headers=headers)
    assert completed.json()["data"]["status"] == "COMPLETED"
    assert completed.json()["data"]["cost"] == 45.5


def test_movement_endpoints(client, asset, manager, auth_headers):
    headers = auth_headers(manager)

    wrong = client.post("/api/movements/entry", json={
        "asset_id": str(asset.id),
        "movement_type": "VENTA",
        "description": "Sold",
    }, headers=headers)
    assert wrong.status_code == 400
    assert wrong.json()["status_code"] == AppStatusCode.INVALID_INPUT

    sold = client.post("/api/movements/exit", json={
        "asset_id": str(asset.id),
        "movement_type": "VENTA",
        "description": "Sold",
    }, headers=headers)
    assert sold.status_code == 200

    history = client.get("/api/movements/", params={"type": "SALIDA"}, headers=headers)
    assert len(history.json()["data"]) == 1


def test_user_management_is_admin_only(client, admin, manager, responsible, auth_headers):
    assert client.get("/api/users/", headers=auth_headers(manager)).status_code == 403

    listing = client.get("/api/users/", headers=auth_headers(admin))
    assert listing.status_code == 200
    assert listing.json()["data"]["total"] == 3

    self_delete = client.delete(f"/api/users/{admin.id}", headers=auth_headers(admin))
    assert self_delete.status_code == 400

    own_assets = client.get(f"/api/users/{responsible.id}/assets", headers=auth_headers(responsible))
    assert own_assets.status_code == 200
    others = client.get(f"/api/users/{manager.id}/assets", headers=auth_headers(responsible))
    assert others.status_code == 403
