"""
Exception hierarchy shared by the wooh modules.
"""


class WoohError(Exception):
    """Base class for every error raised by wooh."""


class ConfigError(WoohError):
    """A configuration value could not be turned into a typed record."""


class DecodeError(WoohError, ValueError):
    """Local JSON state or a remote payload did not have the expected shape."""


class NetworkError(WoohError):
    """A request failed before an HTTP response was received."""


class RemoteError(WoohError):
    """The remote API answered with a non-2xx status."""

    def __init__(self, status: int, body: str, context: str = ""):
        self.status = status
        self.body = body
        self.context = context
        prefix = f"{context}: " if context else ""
        super().__init__(f"{prefix}HTTP {status}: {body[:300]}")


class SeoGenerationError(WoohError):
    """Base class for failures of a single SEO generation attempt."""


class GenerationError(SeoGenerationError):
    """The text-generation API call itself failed."""


class EmptyResponseError(SeoGenerationError):
    """The text-generation API returned no candidate."""


class MalformedReplyError(SeoGenerationError):
    """The reply was not a JSON object with both SEO fields."""


class ConstraintViolation(SeoGenerationError):
    """The generated title or description is over its length limit."""

    def __init__(self, title_length: int, description_length: int,
                 max_title: int, max_description: int):
        self.title_length = title_length
        self.description_length = description_length
        super().__init__(
            f"Meta fields exceed limits: title {title_length}/{max_title}, "
            f"description {description_length}/{max_description}"
        )


class RetriesExhausted(WoohError):
    """No attempt of a bounded retry produced an acceptable result."""

    def __init__(self, attempts: int, last_error: Exception = None):
        self.attempts = attempts
        self.last_error = last_error
        detail = f": {last_error}" if last_error else ""
        super().__init__(f"Gave up after {attempts} attempts{detail}")
