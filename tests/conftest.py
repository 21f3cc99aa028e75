import os
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'soundshelf' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import audio as test_audio


@pytest.fixture
def library_paths(tmp_path):
    """Per-test store document and upload directory."""
    return {
        "data_file": str(tmp_path / "data" / "db.json"),
        "upload_dir": str(tmp_path / "uploads"),
        "public_dir": str(tmp_path / "public"),
    }


@pytest.fixture
def app(library_paths):
    import app as app_module

    application = app_module.create_app(dict(library_paths))
    application.config["TESTING"] = True
    yield application


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def library(app):
    return app.extensions["library_service"]


@pytest.fixture
def audio():
    """Expose the audio fixture builders."""
    return test_audio
