import asyncio

from jsonprompt.errors import ProviderError
from jsonprompt.results import Failed, NeedInfo, Ready
from jsonprompt.schemas import ConversationTurn
from jsonprompt.services.conversion import REPAIR_FAILED_MESSAGE, ConversionService
from jsonprompt.services.gateway import GatewayResponse
from jsonprompt.services.schema_catalog import SCHEMAS


class StubGateway:
    def __init__(self, reply="{}", tokens=7, error=None):
        self.reply = reply
        self.tokens = tokens
        self.error = error
        self.calls = []

    async def generate(self, system_instructions, user_prompt, temperature, *, operation="unspecified"):
        self.calls.append(
            {"system": system_instructions, "user": user_prompt, "temperature": temperature, "operation": operation}
        )
        if self.error is not None:
            raise self.error
        return GatewayResponse(raw_text=self.reply, tokens_used=self.tokens)


def run(coro):
    return asyncio.run(coro)


def test_basic_conversion_ready():
    gateway = StubGateway(reply='{"name":"John Doe","age":30,"company":"TechCorp"}')
    result = run(ConversionService(gateway).convert_basic("John Doe, age 30, works at TechCorp"))

    assert isinstance(result, Ready)
    assert result.to_dict() == {
        "status": "ready",
        "json": '{\n  "name": "John Doe",\n  "age": 30,\n  "company": "TechCorp"\n}',
        "tokensUsed": 7,
    }
    call = gateway.calls[0]
    assert call["temperature"] == 0.3
    assert call["user"] == (
        'Convert this natural language request into a clear, structured JSON prompt: '
        '"John Doe, age 30, works at TechCorp"'
    )
    assert "JSON Prompt Converter" in call["system"]


def test_basic_conversion_clarification():
    gateway = StubGateway(reply="Could you specify the poster's dimensions?")
    result = run(ConversionService(gateway).convert_basic("make a poster"))
    assert isinstance(result, NeedInfo)
    assert result.questions == ("Could you specify the poster's dimensions?",)
    assert result.tokens_used == 7


def test_provider_failure_is_a_failed_result():
    gateway = StubGateway(error=ProviderError("upstream exploded"))
    result = run(ConversionService(gateway).convert_basic("anything"))
    assert isinstance(result, Failed)
    assert result.to_dict() == {"status": "ready", "error": "upstream exploded"}


def test_provider_failure_without_message_uses_fallback():
    gateway = StubGateway(error=ProviderError())
    result = run(ConversionService(gateway).convert_advanced("anything"))
    assert result == Failed(error_message="Advanced AI conversion failed")


def test_advanced_conversion_lists_domains_and_history():
    gateway = StubGateway(reply='{"project": "poster"}')
    history = [
        ConversationTurn(role="user", content="I need a poster"),
        ConversationTurn(role="assistant", content="What size?"),
    ]
    result = run(ConversionService(gateway).convert_advanced("A3, for a jazz night", history))

    assert isinstance(result, Ready)
    call = gateway.calls[0]
    assert call["temperature"] == 0.3
    assert "Gaming & Interactive" in call["system"]
    assert "17 categories" in call["system"]
    assert call["system"].endswith("\n\nConversation History:\nuser: I need a poster\nassistant: What size?\n")
    assert call["user"].startswith('User request: "A3, for a jazz night"')


def test_advanced_conversion_without_history():
    gateway = StubGateway()
    run(ConversionService(gateway).convert_advanced("logo for a bakery", []))
    assert "Conversation History" not in gateway.calls[0]["system"]


def test_prompt_overrides_replace_builtin_system_prompt():
    gateway = StubGateway()
    service = ConversionService(gateway, {"system": {"basic_conversion": "Only JSON, please."}})
    run(service.convert_basic("x"))
    assert gateway.calls[0]["system"] == "Only JSON, please."


def test_repair_output_with_out_of_range_number_stays_valid_json():
    gateway = StubGateway(reply='{"size": 1e400, "count": 3.0}')
    result = run(ConversionService(gateway).repair('{"size": 1e400, "count": 3.0', []))
    assert result.success is True
    assert result.json == '{\n  "size": null,\n  "count": 3\n}'


def test_repair_success():
    gateway = StubGateway(reply='  {"name": "Jo"}  ', tokens=5)
    result = run(ConversionService(gateway).repair("{name: 'Jo'}", ["missing quotes", "bad string"]))

    assert result.to_dict() == {"success": True, "json": '{\n  "name": "Jo"\n}', "tokensUsed": 5}
    call = gateway.calls[0]
    assert call["temperature"] == 0.1
    assert call["user"] == "Fix this JSON: {name: 'Jo'}\n\nErrors to fix: missing quotes, bad string"


def test_repair_failure_echoes_input():
    gateway = StubGateway(reply="{name: 'Jo}")
    result = run(ConversionService(gateway).repair("{name: 'Jo}", []))
    assert result.to_dict() == {
        "success": False,
        "json": "{name: 'Jo}",
        "error": REPAIR_FAILED_MESSAGE,
    }


def test_repair_provider_error_echoes_input():
    gateway = StubGateway(error=ProviderError("no key"))
    result = run(ConversionService(gateway).repair("[1,", None))
    assert result.success is False
    assert result.json == "[1,"
    assert result.error == "no key"


def test_detect_schema_is_a_constant_stub():
    gateway = StubGateway()
    catalog = SCHEMAS + SCHEMAS[:1]
    result = run(ConversionService(gateway).detect_schema("a blog post about cats", catalog))

    assert gateway.calls == []
    assert [m.schema.id for m in result.matches] == ["blog-post", "ad-copy", "support-ticket"]
    assert {m.confidence for m in result.matches} == {0.5}
    assert result.selected_schema.id == "blog-post"
    body = result.to_dict()
    assert body["status"] == "ready"
    assert body["selectedSchema"]["jsonSchema"]["required"] == ["title", "content", "author", "publishDate"]


def test_detect_schema_with_empty_catalog():
    result = run(ConversionService(StubGateway()).detect_schema("anything", []))
    assert result.to_dict() == {"status": "ready", "matches": [], "selectedSchema": None}
