"""Uniform JSON response envelope."""
import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def respond_with_json(status_code: int, payload: Any) -> Response:
    """
    Serialize payload as a JSON response with the given status.
    Falls back to a bare 500 when the payload cannot be encoded.
    """
    try:
        return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))
    except (TypeError, ValueError) as exc:
        logger.error("Error marshalling JSON: %s", exc)
        return Response(status_code=500)


# PUBLIC_INTERFACE
def respond_with_error(status_code: int, message: str) -> Response:
    return respond_with_json(status_code, {"error": message})
