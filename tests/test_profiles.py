"""
供应商资质功能测试
"""

import pytest
from srm.config import UPLOAD_DIR
from srm.exceptions import NotFound
from srm.services.profile_service import ProfileService


def submit(client, headers, user_id, files=None, **fields):
    data = {"user_id": str(user_id)}
    data.update(fields)
    return client.post("/api/profile", data=data, files=files, headers=headers)


def test_profile_empty_before_submit(client, supplier_headers, supplier):
    response = client.get(f"/api/profile/{supplier.id}", headers=supplier_headers)
    assert response.status_code == 200
    assert response.json() == {}


def test_submit_profile(client, supplier_headers, supplier):
    """提交资质文件和有效期"""
    response = submit(
        client, supplier_headers, supplier.id,
        files={
            "license_file": ("license.pdf", b"license", "application/pdf"),
            "permit_file": ("permit.pdf", b"permit", "application/pdf"),
        },
        license_expiry="2026-12-31",
        permit_expiry="2027-06-30"
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["user_id"] == supplier.id
    assert data["license_expiry"] == "2026-12-31"
    assert data["permit_expiry"] == "2027-06-30"
    assert data["license_file"].endswith("-license.pdf")
    assert (UPLOAD_DIR / data["permit_file"].rsplit("/", 1)[1]).read_bytes() == b"permit"

    fetched = client.get(f"/api/profile/{supplier.id}", headers=supplier_headers).json()
    assert fetched["license_file"] == data["license_file"]


def test_resubmit_keeps_missing_fields(client, supplier_headers, supplier):
    """再次提交未上传文件时保留原文件，只更新有效期"""
    first = submit(
        client, supplier_headers, supplier.id,
        files={"license_file": ("license.pdf", b"v1", "application/pdf")},
        license_expiry="2026-12-31"
    ).json()
    second = submit(client, supplier_headers, supplier.id, license_expiry="2028-01-01").json()

    assert second["license_file"] == first["license_file"]
    assert second["license_expiry"] == "2028-01-01"
    assert second["permit_file"] is None


def test_admin_can_view_and_edit(client, admin_headers, supplier):
    response = submit(client, admin_headers, supplier.id, permit_expiry="2027-01-01")
    assert response.status_code == 200
    data = client.get(f"/api/profile/{supplier.id}", headers=admin_headers).json()
    assert data["permit_expiry"] == "2027-01-01"


def test_other_supplier_forbidden(client, supplier_headers, other_supplier_headers, supplier):
    submit(client, supplier_headers, supplier.id, license_expiry="2026-12-31")
    assert client.get(f"/api/profile/{supplier.id}", headers=other_supplier_headers).status_code == 403
    response = submit(client, other_supplier_headers, supplier.id, license_expiry="2030-01-01")
    assert response.status_code == 403


def test_profile_for_non_supplier(client, admin_headers, admin):
    response = submit(client, admin_headers, admin.id, license_expiry="2026-12-31")
    assert response.status_code == 404
    assert client.post(
        "/api/profile", data={"user_id": "9999"}, headers=admin_headers
    ).status_code == 404


def test_service_rejects_unknown_supplier(db, admin):
    with pytest.raises(NotFound):
        ProfileService(db).upsert_profile(admin, 9999)
