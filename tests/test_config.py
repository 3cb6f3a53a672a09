from medibook.core.config import Settings, get_settings
from medibook.main import app

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

def test_client_config_without_maps_key(client):
    response = client.get("/api/config")
    assert response.status_code == 500
    assert response.json()["detail"] == "Maps configuration is not available"

def test_client_config(client):
    app.dependency_overrides[get_settings] = lambda: Settings(GOOGLE_MAPS_API_KEY="test-key")

    response = client.get("/api/config")
    assert response.status_code == 200
    assert response.json() == {"googleMapsApiKey": "test-key"}

def test_unknown_route(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["path"] == "/api/nothing-here"
