"""Core defaults (no environment reads)."""
from dataclasses import dataclass

STUB_ERROR_STATUS = 400
STUB_ERROR_MESSAGE = "stubbed-response-error-message"
STUB_REQUEST_ID = "stubbed-request-id"
DEFAULT_JSON_VERSION = "1.0"
DEFAULT_TIMEOUT = 60


@dataclass
class CoreDefaults:
    error_status: int = STUB_ERROR_STATUS
    error_message: str = STUB_ERROR_MESSAGE
    request_id: str = STUB_REQUEST_ID


DEFAULTS = CoreDefaults()
