from typing import Any, Dict

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from ..results import ValidationResult
from .classifier import parse_strict


def is_valid_json(json_text: str) -> bool:
    ok, _ = parse_strict(json_text)
    return ok


def _instance_path(error) -> str:
    if not error.absolute_path:
        return "root"
    return "/" + "/".join(str(part) for part in error.absolute_path)


def validate_json(json_text: str, schema: Dict[str, Any]) -> ValidationResult:
    """Check `json_text` against a JSON-Schema document, reporting every violation.

    Errors come back as "<path>: <message>" in the validator's own order,
    with "root" standing in for the document itself.
    """
    ok, data = parse_strict(json_text)
    if not ok:
        return ValidationResult(is_valid=False, errors=("Invalid JSON format",))

    cls = validator_for(schema, default=Draft7Validator)
    try:
        cls.check_schema(schema)
    except SchemaError as exc:
        return ValidationResult(is_valid=False, errors=(f"Invalid schema: {exc.message}",))

    validator = cls(schema, format_checker=cls.FORMAT_CHECKER)
    errors = tuple(f"{_instance_path(e)}: {e.message}" for e in validator.iter_errors(data))
    if not errors:
        return ValidationResult(is_valid=True)
    return ValidationResult(is_valid=False, errors=errors)
