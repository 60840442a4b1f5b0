from fastapi import APIRouter, HTTPException

from ..schemas import ValidateRequest
from ..services.schema_catalog import SCHEMAS, get_schema_by_id
from ..services.validation import validate_json

router = APIRouter()


@router.get("/schemas")
async def list_schemas():
    return {"schemas": [s.to_dict() for s in SCHEMAS]}


@router.get("/schemas/{schema_id}")
async def get_schema(schema_id: str):
    schema = get_schema_by_id(schema_id)
    if schema is None:
        raise HTTPException(status_code=404, detail="schema not found")
    return schema.to_dict()


@router.post("/validate")
async def validate(payload: ValidateRequest):
    if payload.schema_document is not None:
        document = payload.schema_document
    elif payload.schema_id:
        schema = get_schema_by_id(payload.schema_id)
        if schema is None:
            raise HTTPException(status_code=404, detail="schema not found")
        document = schema.json_schema
    else:
        raise HTTPException(status_code=400, detail="schemaId or schema required")
    return validate_json(payload.json_text, document).to_dict()
