import pytest
from fastapi import status

MACHINES_URL = "/api/v1/machines/"

@pytest.mark.asyncio
async def test_register_and_get_machine(client):
    response = await client.post(MACHINES_URL, json={
        "machineId": "edge-paris-01",
        "ipAddress": "172.16.0.4",
        "version": "v1.6.2"
    })

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["machineId"] == "edge-paris-01"
    assert data["isValidated"] is False
    assert data["createdAt"] is not None

    response = await client.get(f"{MACHINES_URL}{data['id']}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["ipAddress"] == "172.16.0.4"

@pytest.mark.asyncio
async def test_register_duplicate_machine(client, machine):
    response = await client.post(MACHINES_URL, json={"machineId": "test-machine"})

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"error": "machine test-machine already exists"}

@pytest.mark.asyncio
async def test_register_machine_without_name(client):
    response = await client.post(MACHINES_URL, json={"ipAddress": "172.16.0.4"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["errors"][0]["field"] == "body.machineId"

@pytest.mark.asyncio
async def test_get_unknown_machine(client):
    response = await client.get(f"{MACHINES_URL}12345")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "machine 12345 does not exist"}

@pytest.mark.asyncio
async def test_machine_can_submit_alert(client, make_alert_payload):
    registered = await client.post(MACHINES_URL, json={"machineId": "edge-lyon-02"})
    machine_id = registered.json()["data"]["id"]

    response = await client.post("/api/v1/alerts/", json=make_alert_payload(machine_id))

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["machineId"] == machine_id
