"""Shared error types for the translation layer.

Stream adapters report problems as result values; these exceptions are raised
by the one-shot request converters, the provider registry, and the stream
driver.
"""


class TranslationError(Exception):
    """Base error for all translation failures."""


class UnsupportedProviderError(TranslationError):
    """Requested provider has no transpiler."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unsupported provider: {name}")


class UnsupportedContentError(TranslationError):
    """A vendor payload contains a role or part type with no neutral equivalent."""

    def __init__(self, kind: str, value: object) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value}")


class StreamTranslationError(TranslationError):
    """A stream adapter returned an error result, ending the stream."""

    def __init__(self, provider: str, detail: str) -> None:
        self.provider = provider
        self.detail = detail
        super().__init__(f"{provider} stream failed: {detail}")
