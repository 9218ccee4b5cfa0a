"""
Content negotiation between JSON and protobuf.

The request body is protobuf when ``Content-Type`` contains
``application/x-protobuf``; the response is protobuf when ``Accept``
contains it. Everything else is JSON.
"""

from enum import Enum
from typing import Type, TypeVar

import structlog
from fastapi import Request
from fastapi.responses import Response
from google.protobuf.message import DecodeError, EncodeError
from pydantic import BaseModel, ValidationError

from rankings.core.exceptions import Internal, InvalidArgument, RankingsError
from rankings.schemas.common import ErrorResponse
from rankings.utils.constants import CONTENT_TYPE_JSON, CONTENT_TYPE_PROTOBUF
from rankings.wire.converters import converter_for

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

INVALID_BODY = "Invalid request body"


class WireFormat(str, Enum):
    JSON = "json"
    PROTOBUF = "protobuf"

    @property
    def media_type(self) -> str:
        return CONTENT_TYPE_PROTOBUF if self is WireFormat.PROTOBUF else CONTENT_TYPE_JSON


def request_format(request: Request) -> WireFormat:
    """Wire format of the request body."""
    if CONTENT_TYPE_PROTOBUF in request.headers.get("content-type", ""):
        return WireFormat.PROTOBUF
    return WireFormat.JSON


def response_format(request: Request) -> WireFormat:
    """Wire format the caller accepts."""
    if CONTENT_TYPE_PROTOBUF in request.headers.get("accept", ""):
        return WireFormat.PROTOBUF
    return WireFormat.JSON


def encode(payload: BaseModel, wire_format: WireFormat) -> bytes:
    """Serialize a schema instance."""
    if wire_format is WireFormat.PROTOBUF:
        return converter_for(type(payload)).to_proto(payload).SerializeToString()
    return payload.model_dump_json().encode("utf-8")


def decode(body: bytes, schema: Type[ModelT], wire_format: WireFormat) -> ModelT:
    """
    Parse a request body into ``schema``.

    Raises:
        InvalidArgument: the body is not a valid encoding of ``schema``.
    """
    try:
        if wire_format is WireFormat.PROTOBUF:
            converter = converter_for(schema)
            message = converter.message()
            message.ParseFromString(body)
            return converter.from_proto(message)
        return schema.model_validate_json(body)
    except (DecodeError, ValidationError, ValueError) as exc:
        logger.info("request_body_rejected", schema=schema.__name__, format=wire_format.value, error=str(exc))
        raise InvalidArgument(INVALID_BODY) from exc


async def read_body(request: Request, schema: Type[ModelT]) -> ModelT:
    """Read and decode the request body in the negotiated format."""
    body = await request.body()
    return decode(body, schema, request_format(request))


def respond(request: Request, payload: BaseModel, status_code: int = 200) -> Response:
    """Encode ``payload`` in the format the caller accepts."""
    wire_format = response_format(request)
    try:
        content = encode(payload, wire_format)
    except (EncodeError, TypeError, ValueError) as exc:
        logger.error("response_encode_failed", payload=type(payload).__name__, error=str(exc))
        raise Internal("Failed to encode response") from exc
    return Response(content=content, status_code=status_code, media_type=wire_format.media_type)


def respond_error(request: Request, error: RankingsError) -> Response:
    """Render an error as ``ErrorResponse`` with the error's status code."""
    return error_response(request, error.message, error.status_code)


def error_response(request: Request, message: str, status_code: int) -> Response:
    wire_format = response_format(request)
    payload = ErrorResponse(error=message)
    try:
        content = encode(payload, wire_format)
    except (EncodeError, TypeError, ValueError):
        wire_format = WireFormat.JSON
        content = encode(payload, wire_format)
    return Response(content=content, status_code=status_code, media_type=wire_format.media_type)
