import io
import os

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

DRIVER_FORM = {
    "name": "Budi",
    "vehicleNumber": "B 1234 ABC",
    "phone": "08123456789",
    "status": "active",
    "vehicleType": "truck",
}


def _image(name: str = "scan.jpg", content: bytes = b"\xff\xd8\xff\xe0" + b"\x00" * 100):
    return (name, io.BytesIO(content), "image/jpeg")


def _stored_files(settings) -> list[str]:
    if not os.path.isdir(settings.upload_dir):
        return []
    return os.listdir(settings.upload_dir)


async def _create_driver(client, headers, form=None, files=None):
    response = await client.post(
        "/api/drivers",
        data=form or DRIVER_FORM,
        files=files,
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_create_driver_with_documents(client, admin_headers, settings):
    driver = await _create_driver(
        client,
        admin_headers,
        files={"ktp": _image("ktp.jpg"), "sim": _image("sim.png")},
    )

    assert isinstance(driver["id"], int)
    assert driver["name"] == "Budi"
    assert driver["vehicle_number"] == "B 1234 ABC"
    assert driver["vehicle_type"] == "truck"
    assert driver["ktp_url"].endswith(".jpg")
    assert driver["sim_url"].endswith(".png")
    assert driver["ktp_url"] != driver["sim_url"]
    assert sorted(_stored_files(settings)) == sorted([driver["ktp_url"], driver["sim_url"]])


@pytest.mark.asyncio
async def test_uploaded_document_is_served(client, admin_headers):
    content = b"\xff\xd8\xff\xe0document"
    driver = await _create_driver(client, admin_headers, files={"ktp": _image("ktp.jpg", content)})

    response = await client.get(f"/uploads/{driver['ktp_url']}")

    assert response.status_code == 200
    assert response.content == content


@pytest.mark.asyncio
async def test_create_driver_without_documents(client, admin_headers):
    driver = await _create_driver(client, admin_headers)

    assert driver["ktp_url"] is None
    assert driver["sim_url"] is None


@pytest.mark.asyncio
async def test_create_driver_requires_admin(client, admin_headers, company_headers, settings):
    no_token = await client.post("/api/drivers", data=DRIVER_FORM)
    as_company = await client.post(
        "/api/drivers",
        data=DRIVER_FORM,
        files={"ktp": _image()},
        headers=company_headers,
    )

    assert no_token.status_code == 403
    assert as_company.status_code == 403
    assert as_company.content == b""
    assert _stored_files(settings) == []

    response = await client.get("/api/drivers", headers=admin_headers)
    assert response.json() == []


@pytest.mark.asyncio
async def test_create_driver_removes_documents_when_insert_fails(client, admin_headers, settings, monkeypatch):
    async def failing_commit(self):
        raise SQLAlchemyError("insert failed")

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    response = await client.post(
        "/api/drivers",
        data=DRIVER_FORM,
        files={"ktp": _image(), "sim": _image()},
        headers=admin_headers,
    )

    assert response.status_code == 500
    assert "insert failed" in response.json()["error"]
    assert _stored_files(settings) == []


@pytest.mark.asyncio
async def test_list_drivers_requires_token(client):
    response = await client.get("/api/drivers")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_drivers_filters_by_vehicle_type(client, admin_headers, company_headers):
    await _create_driver(client, admin_headers, form={**DRIVER_FORM, "vehicleType": "truck"})
    await _create_driver(client, admin_headers, form={**DRIVER_FORM, "vehicleType": "van"})
    await _create_driver(client, admin_headers, form={**DRIVER_FORM, "vehicleType": "truck-xl"})

    everything = await client.get("/api/drivers", headers=company_headers)
    trucks = await client.get("/api/drivers", params={"jenis_kendaraan": "truck"}, headers=company_headers)
    blank = await client.get("/api/drivers", params={"jenis_kendaraan": ""}, headers=company_headers)

    assert everything.status_code == 200
    assert len(everything.json()) == 3
    assert [d["vehicle_type"] for d in trucks.json()] == ["truck"]
    assert len(blank.json()) == 3


@pytest.mark.asyncio
async def test_get_driver(client, admin_headers, company_headers):
    driver = await _create_driver(client, admin_headers)

    response = await client.get(f"/api/drivers/{driver['id']}", headers=company_headers)

    assert response.status_code == 200
    assert response.json() == driver


@pytest.mark.asyncio
async def test_get_driver_not_found(client, company_headers):
    response = await client.get("/api/drivers/4242", headers=company_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Driver not found"}


@pytest.mark.asyncio
async def test_get_driver_non_numeric_id(client, company_headers):
    response = await client.get("/api/drivers/abc", headers=company_headers)

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_update_driver_replaces_fields_and_clears_documents(client, admin_headers):
    driver = await _create_driver(
        client,
        admin_headers,
        files={"ktp": _image("ktp.jpg"), "sim": _image("sim.jpg")},
    )

    response = await client.put(
        f"/api/drivers/{driver['id']}",
        data={"name": "Budi Santoso", "vehicleNumber": "B 9999 ZZZ", "status": "inactive"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["id"] == driver["id"]
    assert updated["name"] == "Budi Santoso"
    assert updated["vehicle_number"] == "B 9999 ZZZ"
    assert updated["status"] == "inactive"
    # fields left out of the form are replaced too
    assert updated["phone"] is None
    assert updated["vehicle_type"] is None
    assert updated["ktp_url"] is None
    assert updated["sim_url"] is None


@pytest.mark.asyncio
async def test_update_driver_replaces_uploaded_document(client, admin_headers, settings):
    driver = await _create_driver(
        client,
        admin_headers,
        files={"ktp": _image("ktp.jpg"), "sim": _image("sim.jpg")},
    )

    response = await client.put(
        f"/api/drivers/{driver['id']}",
        data=DRIVER_FORM,
        files={"ktp": _image("ktp-new.png")},
        headers=admin_headers,
    )

    updated = response.json()
    assert updated["ktp_url"].endswith(".png")
    assert updated["ktp_url"] != driver["ktp_url"]
    assert updated["sim_url"] is None
    # previous files are left in place
    assert driver["ktp_url"] in _stored_files(settings)


@pytest.mark.asyncio
@pytest.mark.parametrize("settings_overrides", [{"preserve_documents_on_update": True}])
async def test_update_driver_can_preserve_documents(client, admin_headers):
    driver = await _create_driver(
        client,
        admin_headers,
        files={"ktp": _image("ktp.jpg"), "sim": _image("sim.jpg")},
    )

    response = await client.put(
        f"/api/drivers/{driver['id']}",
        data=DRIVER_FORM,
        files={"sim": _image("sim-new.jpg")},
        headers=admin_headers,
    )

    updated = response.json()
    assert updated["ktp_url"] == driver["ktp_url"]
    assert updated["sim_url"] != driver["sim_url"]


@pytest.mark.asyncio
async def test_update_driver_not_found_writes_no_files(client, admin_headers, settings):
    response = await client.put(
        "/api/drivers/4242",
        data=DRIVER_FORM,
        files={"ktp": _image()},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Driver not found"}
    assert _stored_files(settings) == []


@pytest.mark.asyncio
async def test_update_driver_requires_admin(client, admin_headers, company_headers):
    driver = await _create_driver(client, admin_headers)

    response = await client.put(f"/api/drivers/{driver['id']}", data=DRIVER_FORM, headers=company_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_driver(client, admin_headers, settings):
    driver = await _create_driver(client, admin_headers, files={"ktp": _image()})

    response = await client.delete(f"/api/drivers/{driver['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert response.content == b""

    response = await client.get(f"/api/drivers/{driver['id']}", headers=admin_headers)
    assert response.status_code == 404

    # documents are not removed with the row
    assert driver["ktp_url"] in _stored_files(settings)


@pytest.mark.asyncio
async def test_delete_driver_not_found(client, admin_headers):
    response = await client.delete("/api/drivers/4242", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Driver not found"}


@pytest.mark.asyncio
async def test_delete_driver_requires_admin(client, admin_headers, company_headers):
    driver = await _create_driver(client, admin_headers)

    response = await client.delete(f"/api/drivers/{driver['id']}", headers=company_headers)
    assert response.status_code == 403

    response = await client.get(f"/api/drivers/{driver['id']}", headers=company_headers)
    assert response.status_code == 200
