"""Immutable, flattened scheduler configuration set."""
from typing import Any, Dict, Iterator, Mapping, Optional


class SchedulerProperties(Mapping[str, str]):
    """
    Ordered, flattened mapping of dot-qualified keys to string values.

    Instances are immutable once built. Layering is done by building a new
    set with with_overrides(); the later layer wins every key collision.
    """

    __slots__ = ('_data',)

    def __init__(self, data: Optional[Mapping[Any, Any]] = None):
        self._data: Dict[str, str] = {}
        if data:
            for key, value in data.items():
                self._data[str(key)] = '' if value is None else str(value)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"SchedulerProperties({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SchedulerProperties):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None

    def with_overrides(self, overrides: Optional[Mapping[Any, Any]]) -> 'SchedulerProperties':
        """Return a new set with the overrides layered on top of this one."""
        merged: Dict[str, str] = dict(self._data)
        if overrides:
            for key, value in overrides.items():
                merged[str(key)] = '' if value is None else str(value)
        return SchedulerProperties(merged)

    def to_dict(self) -> Dict[str, str]:
        """Return a mutable copy of the underlying mapping."""
        return dict(self._data)

    def get_str(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get string configuration value.

        Blank values are treated as absent.
        """
        value = self._data.get(key)
        if value is None:
            return default
        value = value.strip()
        return value if value else default

    def get_property_group(self, prefix: str, strip_prefix: bool = True) -> Dict[str, str]:
        """
        Get every property under a dotted prefix.

        Args:
            prefix: Group prefix, with or without the trailing dot
            strip_prefix: Remove the prefix (and dot) from the returned keys

        Returns:
            Dictionary of matching properties, in insertion order
        """
        if not prefix.endswith('.'):
            prefix += '.'
        group: Dict[str, str] = {}
        for key, value in self._data.items():
            if key.startswith(prefix):
                group[key[len(prefix):] if strip_prefix else key] = value
        return group
