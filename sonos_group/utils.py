import json
import logging
from urllib.parse import quote

logger = logging.getLogger(__name__)

def build_url(base_url, *segments):
    """Helper function to join path segments onto the API base URL.

    Each segment is percent-encoded as a whole, so room names containing
    spaces or slashes stay a single path component.
    """
    path = "/".join(quote(str(segment), safe="") for segment in segments)
    return f"{base_url.rstrip('/')}/{path}"

def parse_json_response(text):
    """Helper function to decode a JSON body. Returns None for an empty body."""
    if not text or not text.strip():
        return None
    return json.loads(text)

def is_error_payload(payload):
    """Helper function to detect the API's {"status": "error"} replies."""
    return isinstance(payload, dict) and payload.get("status") == "error"
