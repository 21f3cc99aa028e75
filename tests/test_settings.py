import importlib
import os

import pytest


@pytest.mark.unit
def test_load_app_settings_uses_current_config(monkeypatch, tmp_path):
    monkeypatch.setenv("SOUNDSHELF_DATA_FILE", str(tmp_path / "lib.json"))
    monkeypatch.setenv("SOUNDSHELF_UPLOAD_DIR", str(tmp_path / "media"))
    monkeypatch.setenv("MAX_UPLOAD_FILES", "5")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "http://a.example, http://b.example")

    # Reload config and settings to pick env updates
    import config as _config
    importlib.reload(_config)
    import soundshelf.settings as settings
    importlib.reload(settings)

    s = settings.load_app_settings()
    assert s.data_file == str(tmp_path / "lib.json")
    assert s.upload_dir == str(tmp_path / "media")
    assert s.max_upload_files == 5
    assert s.cors_allowed_origins == ["http://a.example", "http://b.example"]
    assert s.max_content_length is None

    monkeypatch.undo()
    importlib.reload(_config)
    importlib.reload(settings)


@pytest.mark.unit
def test_overrides_win_and_values_are_normalized(tmp_path):
    from soundshelf.settings import load_app_settings

    s = load_app_settings(
        {
            "data_file": "relative/db.json",
            "upload_dir": str(tmp_path),
            "max_upload_files": "0",
            "max_content_length": "-1",
            "cors_allowed_origins": "",
        }
    )
    assert os.path.isabs(s.data_file)
    assert s.max_upload_files == 1
    assert s.max_content_length is None
    assert s.cors_allowed_origins == ["*"]
