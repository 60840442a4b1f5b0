from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field


class ConversationTurn(BaseModel):
    role: str
    content: str


class ConvertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="convert | conversation | advanced | repair | detectSchema")
    input_text: Optional[str] = Field(None, alias="inputText", description="Free-text request to convert")
    message: Optional[str] = Field(None, description="Chat message; takes precedence over inputText")
    invalid_json: Optional[str] = Field(None, alias="invalidJSON", description="JSON text to repair")
    validation_errors: Optional[List[str]] = Field(None, alias="validationErrors")
    conversation_history: Optional[List[ConversationTurn]] = Field(
        None, alias="conversationHistory", description="Prior turns, oldest first"
    )

    @property
    def text(self) -> Optional[str]:
        return self.message or self.input_text


class ValidateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    json_text: str = Field(..., alias="json", description="JSON document to validate")
    schema_id: Optional[str] = Field(None, alias="schemaId", description="Built-in schema id")
    schema_document: Optional[Dict[str, Any]] = Field(None, alias="schema", description="Inline JSON-Schema")


class WaitlistRequest(BaseModel):
    email: str = ""
    tool: Optional[str] = None
