"""
Search parameters and height window resolution.

Parameters are a closed set of variants. OpenSearch is the fallback for
free-form mappings: it honours the height keys it knows and ignores the rest.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping, Optional, Tuple, Union

from .errors import HeightResolutionError

logger = logging.getLogger(__name__)

Bounds = Tuple[Optional[int], Optional[int]]


def as_int(value: Any) -> Optional[int]:
    """Integer parameters only. bool is an int subclass but never a height or amount."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def as_count(value: Any) -> Optional[int]:
    """Non-negative integer, or None when the value is unusable."""
    value = as_int(value)
    if value is None or value < 0:
        return None
    return value


@dataclass(frozen=True)
class SearchParams:
    """Base class for search parameter variants."""

    def bounds(self) -> Bounds:
        return None, None


@dataclass(frozen=True)
class NoConstraint(SearchParams):
    """No additional constraints supplied."""


@dataclass(frozen=True)
class BlockHeightSearch(SearchParams):
    """
    Search for records between two block heights (inclusive).

    Example:
        params = BlockHeightSearch(89995, 99995)
        record = await provider.find_credits_record(5000, True, [], params)
    """
    start_height: int
    end_height: int

    def bounds(self) -> Bounds:
        return as_int(self.start_height), as_int(self.end_height)


@dataclass(frozen=True)
class ProgramRecordSearch(SearchParams):
    """Constraints for records of an arbitrary program."""
    program_id: str
    record_name: Optional[str] = None
    amount: Optional[int] = None
    max_records: Optional[int] = None
    start_height: Optional[int] = None
    end_height: Optional[int] = None

    def bounds(self) -> Bounds:
        return as_int(self.start_height), as_int(self.end_height)


@dataclass(frozen=True)
class OpenSearch(SearchParams):
    """Free-form key-value parameters. Unknown keys are ignored."""
    fields: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def get(self, *keys: str) -> Any:
        for key in keys:
            if key in self.fields:
                return self.fields[key]
        return None

    def bounds(self) -> Bounds:
        return (
            as_int(self.get("startHeight", "start_height")),
            as_int(self.get("endHeight", "end_height")),
        )


SearchParamsLike = Union[SearchParams, Mapping[str, Any], Any, None]


def as_search_params(value: SearchParamsLike) -> SearchParams:
    """Coerce None, a mapping or an attribute bag into a SearchParams variant."""
    if value is None:
        return NoConstraint()
    if isinstance(value, SearchParams):
        return value
    if isinstance(value, Mapping):
        return OpenSearch(dict(value))
    if hasattr(value, "__dict__"):
        return OpenSearch(dict(vars(value)))
    logger.debug(f"Ignoring unrecognized search parameters: {type(value).__name__}")
    return NoConstraint()


@dataclass(frozen=True)
class HeightWindow:
    """Resolved inclusive block height range."""
    start_height: int
    end_height: int

    def __contains__(self, height: int) -> bool:
        return self.start_height <= height <= self.end_height

    def __str__(self) -> str:
        return f"[{self.start_height}, {self.end_height}]"


LatestHeight = Callable[[], Awaitable[Any]]


async def resolve_height_window(
    search_parameters: SearchParamsLike,
    latest_height: LatestHeight,
) -> Union[HeightWindow, HeightResolutionError]:
    """
    Turn search parameters into a concrete window.

    A missing start bound is 0. A missing end bound is the chain tip, fetched
    with a single call to latest_height. Failure is returned, not raised.
    """
    start, end = as_search_params(search_parameters).bounds()
    if start is None:
        start = 0

    if end is None:
        try:
            tip = await latest_height()
        except Exception as e:
            logger.error(f"Error getting latest height: {e}")
            return HeightResolutionError("Unable to get current block height", cause=e)
        if isinstance(tip, BaseException):
            logger.error(f"Error getting latest height: {tip}")
            return HeightResolutionError("Unable to get current block height", cause=tip)
        end = as_int(tip)
        if end is None:
            return HeightResolutionError(f"Invalid block height from ledger: {tip!r}")

    if start < 0 or end < 0:
        return HeightResolutionError(f"Block heights must be non-negative: [{start}, {end}]")
    if start > end:
        return HeightResolutionError(f"Start height {start} is above end height {end}")
    return HeightWindow(start, end)
