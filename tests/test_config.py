from maps_proxy.config import Settings


def test_server_key_falls_back_to_frontend_key():
    assert Settings(maps_api_key="front").server_key == "front"
    assert Settings(maps_api_key="front", server_api_key="server").server_key == "server"


def test_from_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "front")
    monkeypatch.setenv("GOOGLE_MAPS_SERVER_API_KEY", "server")
    monkeypatch.setenv("FACILITY_STORE", "Mongo")
    monkeypatch.setenv("MONGO_HOST", "db")
    monkeypatch.setenv("MONGO_PORT", "27018")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("METRICS_PORT", "9100")

    settings = Settings.from_env()

    assert settings.maps_api_key == "front"
    assert settings.server_key == "server"
    assert settings.facility_store == "mongo"
    assert settings.mongo_uri == "mongodb://db:27018"
    assert settings.request_timeout == 2.5
    assert settings.metrics_port == 9100


def test_from_env_defaults(monkeypatch):
    for name in (
        "GOOGLE_MAPS_API_KEY",
        "GOOGLE_MAPS_SERVER_API_KEY",
        "FACILITY_STORE",
        "REQUEST_TIMEOUT",
        "METRICS_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GOOGLE_MAPS_SERVER_API_KEY", "   ")

    settings = Settings.from_env()

    assert settings.maps_api_key is None
    assert settings.server_key is None
    assert settings.facility_store is None
    assert settings.request_timeout is None
    assert settings.metrics_port is None
