from dataclasses import dataclass, field

from .rendering import format_result


@dataclass
class ResponseInfo:
    status_code: int
    header_bytes: int = 0
    body_bytes: int = 0
    extract: list[str] = field(default_factory=list)


@dataclass
class Result:
    """Outcome of one probe: either a response or an error, never both."""

    label: str
    response: ResponseInfo | None = None
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def __str__(self) -> str:
        return format_result(self)
