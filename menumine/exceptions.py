"""Custom exceptions for the extraction pipeline with run context."""

from typing import Optional, Sequence


class MenumineError(Exception):
    """Base class for pipeline errors."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class NoCandidateData(MenumineError):
    """
    Exception raised when no usable document was supplied.

    Attributes:
        message: Error description
        supplied: Number of documents offered
        skipped: Number of documents rejected during scoring
    """

    def __init__(self, message: Optional[str] = None, supplied: int = 0, skipped: int = 0):
        self.supplied = supplied
        self.skipped = skipped
        self.message = message or "Captured 0 usable JSON documents."

        parts = [self.message]
        if supplied:
            parts.append(f"({skipped} of {supplied} documents skipped)")

        super().__init__(" ".join(parts))


class NoResultFound(MenumineError):
    """
    Exception raised when every extraction strategy came up empty.

    Attributes:
        message: Error description
        source: Identifier of the document that was searched
        strategies: Names of the strategies that were tried
    """

    def __init__(
        self,
        message: Optional[str] = None,
        source: Optional[str] = None,
        strategies: Sequence[str] = (),
    ):
        self.source = source
        self.strategies = tuple(strategies)
        self.message = message or (
            "Could not locate a matching menu in the captured JSON. "
            "The data structure may have changed."
        )

        parts = [self.message]
        if self.strategies:
            parts.append(f"Tried: {', '.join(self.strategies)}.")
        if source:
            parts.append(f"Source: {source}")

        super().__init__(" ".join(parts))


class FallbackProbeFailed(MenumineError):
    """
    Exception raised when one fallback fetch fails. Never fatal on its own.

    Attributes:
        url: Probe URL
        original_error: The underlying transport or decoding error
    """

    def __init__(self, url: str, original_error: Optional[Exception] = None):
        self.url = url
        self.original_error = original_error

        message = f"Fallback probe failed: {url}"
        if original_error:
            message += f" :: {original_error}"

        super().__init__(message)


class OversizePayload(MenumineError):
    """
    Payload still exceeds the byte budget after the narrowest profile.

    Not raised by the pipeline: the oversize payload is delivered anyway and
    this error is attached to the outcome for the caller to report.

    Attributes:
        byte_size: Serialized size of the delivered payload
        budget: Byte budget
    """

    def __init__(self, byte_size: int, budget: int):
        self.byte_size = byte_size
        self.budget = budget
        super().__init__(
            f"Payload is still too large ({byte_size} bytes, budget {budget}) after compaction."
        )
