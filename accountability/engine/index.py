"""Completion lookup index."""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from ..models.task import Completion, TaskId
from ..utils.datetime_utils import DateLike, as_date, format_date


IndexKey = Tuple[TaskId, str]


def _key(task_id: TaskId, day: str) -> IndexKey:
    return (task_id, day)


class CompletionIndex:
    """Immutable (task, date) -> Completion lookup built once per batch.

    Safe to share between callers: the underlying mapping is exposed
    read-only and never modified after construction.
    """

    __slots__ = ('_entries',)

    def __init__(self, entries: Mapping[IndexKey, Completion]):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def build(cls, completions: Iterable[Completion]) -> "CompletionIndex":
        return cls({_key(c.task_id, c.date): c for c in completions})

    def get(self, task_id: TaskId, day: DateLike) -> Optional[Completion]:
        """O(1) lookup; day may be a date, datetime or YYYY-MM-DD string."""
        day_str = day if isinstance(day, str) else format_date(as_date(day))
        return self._entries.get(_key(task_id, day_str))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[Completion]:
        return iter(self._entries.values())

    def __repr__(self) -> str:
        return f"CompletionIndex({len(self._entries)} entries)"


def build_completion_index(completions: Iterable[Completion]) -> CompletionIndex:
    """Build an O(1) lookup index from a flat completion list."""
    return CompletionIndex.build(completions)


def ensure_index(
    completions: Iterable[Completion],
    index: Optional[CompletionIndex] = None,
) -> CompletionIndex:
    """Return the given index, or build one from completions."""
    if index is not None:
        return index
    return build_completion_index(completions)
