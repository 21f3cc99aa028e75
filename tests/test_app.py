import logging
import os

import pytest


@pytest.fixture
def root_logger():
    """Hand out the root logger and put its handlers and level back afterwards."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def _added(root, before, name):
    return [h for h in root.handlers if h not in before and h.get_name() == name]


@pytest.mark.unit
def test_each_run_logs_to_one_fresh_file(tmp_path, monkeypatch, root_logger):
    import app as app_module

    monkeypatch.setattr(app_module.Config, "ENABLE_CONSOLE_LOGS", False, raising=True)
    before = list(root_logger.handlers)

    app_module.configure_logging(str(tmp_path / "logs"))
    path = app_module.configure_logging(str(tmp_path / "logs"))
    logging.getLogger("soundshelf.test").info("library opened")

    (file_handler,) = _added(root_logger, before, "soundshelf-file")
    assert os.path.basename(path).startswith("log-")
    assert os.path.abspath(file_handler.baseFilename) == os.path.abspath(path)
    file_handler.flush()
    with open(path, encoding="utf-8") as handle:
        lines = [line for line in handle if "library opened" in line]
    assert len(lines) == 1
    assert "soundshelf.test - INFO" in lines[0]
    assert _added(root_logger, before, "soundshelf-console") == []


@pytest.mark.unit
def test_console_handler_is_warning_level_and_not_stacked(tmp_path, monkeypatch, root_logger):
    import app as app_module

    monkeypatch.setattr(app_module.Config, "ENABLE_CONSOLE_LOGS", True, raising=True)
    before = list(root_logger.handlers)

    for _ in range(3):
        app_module.configure_logging(str(tmp_path / "logs"))

    consoles = _added(root_logger, before, "soundshelf-console")
    assert len(consoles) == 1
    assert consoles[0].level == logging.WARNING


@pytest.mark.unit
def test_create_app_registers_blueprints_and_library(app, library_paths):
    for bp in ("music_bp", "playlist_bp", "health_bp", "metrics_bp"):
        assert bp in app.blueprints

    library = app.extensions["library_service"]
    assert library.store.data_file == library_paths["data_file"]
    assert os.path.isdir(library_paths["upload_dir"])
    assert app.config["MAX_UPLOAD_FILES"] == 20


@pytest.mark.unit
def test_request_id_is_echoed_or_generated(client):
    echoed = client.get("/api/music", headers={"X-Request-ID": "abc123"})
    assert echoed.headers["X-Request-ID"] == "abc123"

    generated = client.get("/api/music")
    assert len(generated.headers["X-Request-ID"]) == 32


@pytest.mark.unit
def test_healthz_reports_store_and_uploads(client, library_paths):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.get_json()["checks"] == {"store": "empty", "uploads": "ok"}

    client.post("/api/playlists", json={"name": "P"})
    assert client.get("/healthz").get_json()["checks"]["store"] == "ok"


@pytest.mark.unit
def test_healthz_degrades_on_corrupt_store(client, library_paths):
    os.makedirs(os.path.dirname(library_paths["data_file"]), exist_ok=True)
    with open(library_paths["data_file"], "w", encoding="utf-8") as handle:
        handle.write("{broken")

    resp = client.get("/healthz")
    assert resp.status_code == 503
    assert resp.get_json()["status"] == "degraded"
    # API keeps serving from an empty library
    assert client.get("/api/music").get_json() == {"tracks": []}


@pytest.mark.unit
def test_readyz(client):
    resp = client.get("/readyz")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ready"}


@pytest.mark.unit
def test_metrics_count_stream_requests(client):
    client.get("/api/music/stream/missing")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    body = resp.data.decode("utf-8")
    assert 'soundshelf_stream_requests_total{status="404"}' in body


@pytest.mark.unit
def test_serves_player_from_public_dir(client, library_paths):
    public = library_paths["public_dir"]
    os.makedirs(public, exist_ok=True)
    with open(os.path.join(public, "index.html"), "w", encoding="utf-8") as handle:
        handle.write("<html>player</html>")

    resp = client.get("/")
    assert resp.status_code == 200
    assert b"player" in resp.data
    resp.close()


@pytest.mark.unit
def test_without_public_dir_root_is_404(client):
    assert client.get("/").status_code == 404
