class JsonPromptError(Exception):
    """Base class for failures raised inside the service layer."""


class InputError(JsonPromptError):
    """Malformed or oversized caller input, detected before any I/O."""


class ProviderError(JsonPromptError):
    """The LLM call could not be made or returned an error."""


class PersistenceError(JsonPromptError):
    """A write to the hosted database failed for a reason other than a duplicate."""


class ConfigurationError(JsonPromptError):
    """Required external configuration is absent or structurally invalid."""
