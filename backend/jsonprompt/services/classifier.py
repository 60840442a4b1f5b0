import json
import math
import logging
from typing import Any, Optional, Tuple, Union

from ..results import NeedInfo, Ready

logger = logging.getLogger(__name__)

# Integral numbers below this print without an exponent in JavaScript
_PLAIN_INTEGER_LIMIT = 1e21
# Integers with more digits than this do not fit a double
_MAX_INTEGER_DIGITS = 309


def _reject_constant(name: str):
    # NaN / Infinity are not JSON
    raise ValueError(f"invalid JSON constant: {name}")


def _parse_float(text: str):
    value = float(text)
    if not math.isfinite(value):
        # Out of double range; serializes as null
        return None
    if value.is_integer() and abs(value) < _PLAIN_INTEGER_LIMIT:
        return int(value)
    return value


def _parse_int(text: str):
    if len(text.lstrip("-")) > _MAX_INTEGER_DIGITS:
        return None
    return int(text)


def parse_strict(text: str) -> Tuple[bool, Any]:
    """Parse `text` as JSON with the strictness of a standards-conforming parser.

    Numbers are read the way a double-based parser reads them: values out of
    range become None and integral floats become ints.
    """
    try:
        return True, json.loads(
            text,
            parse_constant=_reject_constant,
            parse_float=_parse_float,
            parse_int=_parse_int,
        )
    except (ValueError, RecursionError):
        return False, None


def canonical_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)


def classify(raw_text: str, tokens_used: Optional[int] = None) -> Union[Ready, NeedInfo]:
    """Ready with pretty-printed JSON if the text parses, otherwise NeedInfo.

    A non-JSON answer is taken verbatim as the single clarification question.
    """
    text = (raw_text or "").strip()
    ok, value = parse_strict(text)
    if ok:
        logger.info("Model output parsed as JSON")
        return Ready(json=canonical_json(value), tokens_used=tokens_used)

    logger.info("Model output is not JSON; treating it as a clarification question")
    # An empty answer still has to carry one question
    return NeedInfo(questions=(text,), tokens_used=tokens_used)
