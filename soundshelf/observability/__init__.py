# noqa: D104 - package initialization
from .logging import configure_structured_logging  # noqa: F401
from .metrics import (  # noqa: F401
    metrics_blueprint,
    record_deletion,
    record_registration,
    record_stream_bytes,
    record_stream_request,
    record_uploads,
)
