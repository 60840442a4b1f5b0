import logging
from typing import Optional, Sequence

from .. import prompts
from ..errors import ProviderError
from ..results import ConversionResult, Failed, RepairResult, SchemaDetectionResult, SchemaMatch
from ..schemas import ConversationTurn
from .classifier import canonical_json, classify, parse_strict
from .gateway import LLMGateway
from .schema_catalog import SchemaDefinition

logger = logging.getLogger(__name__)

CONVERSION_TEMPERATURE = 0.3
REPAIR_TEMPERATURE = 0.1
DETECTION_CONFIDENCE = 0.5
MAX_SCHEMA_MATCHES = 3

REPAIR_FAILED_MESSAGE = "Repair failed - AI returned invalid JSON"


class ConversionService:
    """Turns free text into JSON through the LLM gateway.

    Stateless across calls: conversation continuity comes only from the
    history the caller resends each time.
    """

    def __init__(self, gateway: LLMGateway, prompt_overrides: Optional[dict] = None):
        self._gateway = gateway
        self._overrides = prompt_overrides or {}

    async def convert_basic(self, text: str) -> ConversionResult:
        logger.info("Basic conversion requested (input length %d)", len(text))
        return await self._convert(
            system=prompts.system_prompt("basic_conversion", self._overrides),
            user=prompts.basic_user_prompt(text),
            operation="convert_basic",
            fallback_error="Basic AI conversion failed",
        )

    async def convert_advanced(
        self, text: str, history: Optional[Sequence[ConversationTurn]] = None
    ) -> ConversionResult:
        logger.info(
            "Advanced conversion requested (input length %d, %d prior turns)",
            len(text),
            len(history or ()),
        )
        system = prompts.system_prompt("advanced_conversion", self._overrides) + prompts.history_block(history)
        return await self._convert(
            system=system,
            user=prompts.advanced_user_prompt(text),
            operation="convert_advanced",
            fallback_error="Advanced AI conversion failed",
        )

    async def _convert(self, *, system: str, user: str, operation: str, fallback_error: str) -> ConversionResult:
        try:
            resp = await self._gateway.generate(system, user, CONVERSION_TEMPERATURE, operation=operation)
        except ProviderError as exc:
            return Failed(error_message=str(exc) or fallback_error)
        return classify(resp.raw_text, resp.tokens_used)

    async def repair(self, invalid_json: str, errors: Optional[Sequence[str]] = None) -> RepairResult:
        """Ask the model to fix JSON syntax. The input is echoed back on any failure."""
        try:
            resp = await self._gateway.generate(
                prompts.system_prompt("json_repair", self._overrides),
                prompts.repair_user_prompt(invalid_json, errors or []),
                REPAIR_TEMPERATURE,
                operation="repair",
            )
        except ProviderError as exc:
            return RepairResult(success=False, json=invalid_json, error=str(exc) or "JSON repair failed")

        ok, value = parse_strict(resp.raw_text.strip())
        if not ok:
            logger.info("Repair output was not valid JSON")
            return RepairResult(success=False, json=invalid_json, error=REPAIR_FAILED_MESSAGE)
        return RepairResult(success=True, json=canonical_json(value), tokens_used=resp.tokens_used)

    async def detect_schema(self, text: Optional[str], catalog: Sequence[SchemaDefinition]) -> SchemaDetectionResult:
        # Placeholder detection: no model call, every candidate scores the same.
        # TODO: replace with real matching once a scoring approach is agreed on.
        matches = tuple(SchemaMatch(schema=s, confidence=DETECTION_CONFIDENCE) for s in catalog[:MAX_SCHEMA_MATCHES])
        selected = catalog[0] if catalog else None
        return SchemaDetectionResult(matches=matches, selected_schema=selected)
