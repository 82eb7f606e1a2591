"""Custom exceptions for the manual judgment gate."""


class JudgmentGateError(Exception):
    """Base exception for all judgment gate errors."""


class ConfigurationError(JudgmentGateError):
    """Raised when configuration is invalid or missing."""


class IntegrationError(JudgmentGateError):
    """Raised when an integration call fails."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class ProviderNotFoundError(JudgmentGateError):
    """Raised when a requested integration provider is not registered."""

    def __init__(self, category: str, provider: str | None = None):
        self.category = category
        self.provider = provider
        detail = f" (provider={provider})" if provider else ""
        super().__init__(f"No provider found for category '{category}'{detail}")


class StageMismatchError(JudgmentGateError):
    """Raised when a stage refresh targets a different stage than the gate's."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Gate is attached to stage '{expected}', got refresh for '{actual}'")


class JudgmentInputError(JudgmentGateError):
    """Raised when an operator picks a value the stage does not offer."""

    def __init__(self, value: str, offered: list[str]):
        self.value = value
        self.offered = offered
        super().__init__(f"'{value}' is not one of the offered judgment inputs: {offered}")
