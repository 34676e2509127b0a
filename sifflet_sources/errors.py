"""Exceptions raised by the source parameters layer."""

from __future__ import annotations

from collections.abc import Iterable

PROVIDER_BUG_HINT = "This is a bug in the provider, please report it."


class SourceParametersError(Exception):
    """Base error for everything raised by the parameters layer."""


class UnsupportedSourceTypeError(SourceParametersError):
    """Source type tag is not in the registry."""

    def __init__(self, source_type: str) -> None:
        super().__init__(f"unsupported source type: {source_type}")
        self.source_type = source_type


class NoMatchError(SourceParametersError):
    """Payload matched none of the candidate shapes."""

    def __init__(self, message: str = "data matches no known shape") -> None:
        super().__init__(message)


class AmbiguousMatchError(SourceParametersError):
    """Payload matched more than one candidate shape."""

    def __init__(self, tags: Iterable[str]) -> None:
        self.tags = sorted(tags)
        self.count = len(self.tags)
        super().__init__(
            f"data matches more than one shape ({self.count} matches: "
            f"{', '.join(self.tags)})"
        )


class MalformedShapeError(SourceParametersError):
    """Payload carried the right type tag but failed field validation."""

    def __init__(self, source_type: str, reason: str) -> None:
        super().__init__(f"invalid parameters for source type {source_type}: {reason}")
        self.source_type = source_type
        self.reason = reason


class EnumMappingError(SourceParametersError, ValueError):
    """String could not be mapped onto a closed enumeration."""

    def __init__(self, field: str, value: object, allowed: Iterable[str]) -> None:
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"invalid {field}: {value!r} (expected one of {', '.join(self.allowed)})"
        )


class ContractViolationError(SourceParametersError):
    """Caller broke a precondition. Never caused by user configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(f"{message}. {PROVIDER_BUG_HINT}")


class UnresolvableParametersError(ContractViolationError):
    """Flat container does not hold exactly one populated variant."""

    def __init__(self, matches: Iterable[str]) -> None:
        self.matches = sorted(matches)
        if self.matches:
            detail = f"{len(self.matches)} parameter blocks are set: {', '.join(self.matches)}"
        else:
            detail = "no parameter block is set"
        super().__init__(
            f"could not determine source type from configuration ({detail})"
        )


class ParametersParseError(ContractViolationError):
    """DTO handed to a handler is not that handler's shape."""

    def __init__(self, source_type: str, got: str) -> None:
        self.source_type = source_type
        super().__init__(
            f"cannot parse parameters for type {source_type} (got {got})"
        )


class CredentialError(SourceParametersError):
    """Credential presence does not match what the source type expects.

    ``summary`` is the short title shown to users, the message is the detail.
    """

    def __init__(self, summary: str, detail: str) -> None:
        super().__init__(detail)
        self.summary = summary
