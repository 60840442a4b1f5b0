from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .services.schema_catalog import SchemaDefinition


@dataclass(frozen=True)
class Ready:
    json: str
    tokens_used: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"status": "ready", "json": self.json}
        if self.tokens_used is not None:
            out["tokensUsed"] = self.tokens_used
        return out


@dataclass(frozen=True)
class NeedInfo:
    questions: Tuple[str, ...]
    tokens_used: Optional[int] = None

    def __post_init__(self):
        if not self.questions:
            raise ValueError("NeedInfo requires at least one question")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"status": "need_info", "questions": list(self.questions)}
        if self.tokens_used is not None:
            out["tokensUsed"] = self.tokens_used
        return out


@dataclass(frozen=True)
class Failed:
    error_message: str

    def to_dict(self) -> Dict[str, Any]:
        # Clients key off "error"; status stays "ready" on the wire.
        return {"status": "ready", "error": self.error_message}


ConversionResult = Union[Ready, NeedInfo, Failed]


@dataclass(frozen=True)
class RepairResult:
    success: bool
    json: str
    error: Optional[str] = None
    tokens_used: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success, "json": self.json}
        if self.error is not None:
            out["error"] = self.error
        if self.tokens_used is not None:
            out["tokensUsed"] = self.tokens_used
        return out


@dataclass(frozen=True)
class SchemaMatch:
    schema: SchemaDefinition
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {"schema": self.schema.to_dict(), "confidence": self.confidence}


@dataclass(frozen=True)
class SchemaDetectionResult:
    matches: Tuple[SchemaMatch, ...]
    selected_schema: Optional[SchemaDefinition]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "ready",
            "matches": [m.to_dict() for m in self.matches],
            "selectedSchema": self.selected_schema.to_dict() if self.selected_schema else None,
        }


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"isValid": self.is_valid, "errors": list(self.errors)}
