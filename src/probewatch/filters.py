from collections.abc import Iterable
from typing import Protocol

from .models import Result


class ResultFilter(Protocol):
    """Decides whether a result is hidden from the transcript."""

    def reject(self, result: Result) -> bool: ...


class FilterSet:
    def __init__(self, filters: Iterable[ResultFilter] = ()) -> None:
        self.filters: tuple[ResultFilter, ...] = tuple(filters)

    def should_suppress(self, result: Result) -> bool:
        return any(f.reject(result) for f in self.filters)

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        return f"FilterSet({list(self.filters)!r})"


class RejectStatusCodes:
    def __init__(self, codes: Iterable[int]) -> None:
        self.codes = frozenset(codes)

    def reject(self, result: Result) -> bool:
        if result.response is None:
            return False
        return result.response.status_code in self.codes

    def __repr__(self) -> str:
        return f"RejectStatusCodes({sorted(self.codes)})"


class RejectBodySize:
    def __init__(self, sizes: Iterable[int]) -> None:
        self.sizes = frozenset(sizes)

    def reject(self, result: Result) -> bool:
        if result.response is None:
            return False
        return result.response.body_bytes in self.sizes

    def __repr__(self) -> str:
        return f"RejectBodySize({sorted(self.sizes)})"


class RejectErrors:
    def reject(self, result: Result) -> bool:
        return result.failed

    def __repr__(self) -> str:
        return "RejectErrors()"
