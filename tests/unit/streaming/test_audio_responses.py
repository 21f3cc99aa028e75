import pytest
from flask import Flask
from hypothesis import HealthCheck, given, settings, strategies as st
from prometheus_client import REGISTRY

from soundshelf.streaming import DEFAULT_AUDIO_TYPE, guess_audio_type, stream_audio_file

SIZE = 1000


@pytest.fixture
def clip(tmp_path, audio):
    path = tmp_path / "clip.mp3"
    path.write_bytes(audio.pattern_bytes(SIZE))
    return path


@pytest.fixture
def clip_client(clip):
    app = Flask(__name__)

    @app.route("/clip")
    def serve_clip():
        return stream_audio_file(str(clip))

    return app.test_client()


def _streamed_bytes():
    return REGISTRY.get_sample_value("soundshelf_stream_bytes_total") or 0


@pytest.mark.unit
def test_full_response_carries_validators(clip_client, audio):
    resp = clip_client.get("/clip")
    assert resp.status_code == 200
    assert resp.data == audio.pattern_bytes(SIZE)
    assert resp.headers["Accept-Ranges"] == "bytes"
    assert resp.headers["Content-Type"] == "audio/mpeg"
    assert resp.headers.get("ETag")
    assert resp.headers.get("Last-Modified")


@pytest.mark.unit
def test_multiple_ranges_are_not_satisfiable(clip_client):
    resp = clip_client.get("/clip", headers={"Range": "bytes=0-1,5-6"})
    assert resp.status_code == 416
    assert resp.headers["Content-Range"] == f"bytes */{SIZE}"


@pytest.mark.unit
def test_matching_etag_returns_not_modified(clip_client):
    etag = clip_client.get("/clip").headers["ETag"]
    resp = clip_client.get("/clip", headers={"If-None-Match": etag})
    assert resp.status_code == 304
    assert resp.data == b""


@pytest.mark.unit
def test_if_range_with_stale_validator_sends_whole_file(clip_client, audio):
    etag = clip_client.get("/clip").headers["ETag"]

    fresh = clip_client.get("/clip", headers={"Range": "bytes=10-19", "If-Range": etag})
    assert fresh.status_code == 206
    assert fresh.data == audio.pattern_bytes(SIZE)[10:20]

    stale = clip_client.get("/clip", headers={"Range": "bytes=10-19", "If-Range": '"stale"'})
    assert stale.status_code == 200
    assert len(stale.data) == SIZE


@pytest.mark.unit
def test_served_bytes_are_counted(clip_client):
    before = _streamed_bytes()
    clip_client.get("/clip", headers={"Range": "bytes=0-99"})
    clip_client.get("/clip")
    assert _streamed_bytes() - before == 100 + SIZE


@pytest.mark.unit
@settings(max_examples=40, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(data=st.data())
def test_any_valid_range_returns_exactly_that_span(clip_client, audio, data):
    start = data.draw(st.integers(min_value=0, max_value=SIZE - 1))
    end = data.draw(st.integers(min_value=start, max_value=SIZE * 2))
    resp = clip_client.get("/clip", headers={"Range": f"bytes={start}-{end}"})

    last = min(end, SIZE - 1)
    assert resp.status_code == 206
    assert resp.data == audio.pattern_bytes(SIZE)[start:last + 1]
    assert resp.headers["Content-Range"] == f"bytes {start}-{last}/{SIZE}"


@pytest.mark.unit
def test_guess_audio_type_defaults_for_unknown_extensions():
    assert guess_audio_type("/x/song.mp3") == "audio/mpeg"
    assert guess_audio_type("/x/song.unknownext") == DEFAULT_AUDIO_TYPE
    assert guess_audio_type("/x/noext") == DEFAULT_AUDIO_TYPE
