import json
import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from ..config import MAX_INPUT_LENGTH
from ..errors import InputError
from ..schemas import ConvertRequest
from ..services.conversion import ConversionService

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(message: str) -> dict:
    # Errors ride in the body with a 200 status
    return {"success": False, "error": message}


def _check_lengths(body: dict) -> None:
    for key in ("inputText", "message"):
        value = body.get(key)
        if isinstance(value, str) and len(value) > MAX_INPUT_LENGTH:
            raise InputError("Input text too long")


def _require_text(req: ConvertRequest) -> str:
    text = req.text
    if not text:
        raise InputError("Missing input text")
    return text


@router.post("/convert")
async def convert(request: Request):
    try:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise InputError("Invalid JSON body")

        if not isinstance(body, dict) or not body.get("type") or not isinstance(body.get("type"), str):
            return _error("Invalid or missing request type")

        _check_lengths(body)

        try:
            req = ConvertRequest.model_validate(body)
        except ValidationError:
            raise InputError("Invalid request body")

        service: ConversionService = request.app.state.conversion

        if req.type in ("convert", "conversation"):
            result = await service.convert_basic(_require_text(req))
            return result.to_dict()

        if req.type == "advanced":
            result = await service.convert_advanced(_require_text(req), req.conversation_history)
            return result.to_dict()

        if req.type == "repair":
            if req.invalid_json is None:
                raise InputError("Missing JSON to repair")
            repaired = await service.repair(req.invalid_json, req.validation_errors)
            return repaired.to_dict()

        if req.type == "detectSchema":
            # The endpoint offers detection an empty catalog
            detection = await service.detect_schema(req.input_text, [])
            return detection.to_dict()

        return _error("Invalid request type")
    except InputError as exc:
        return _error(str(exc))
    except Exception as exc:
        logger.exception("Unhandled error in /api/convert")
        return _error(str(exc) or "Server error")
