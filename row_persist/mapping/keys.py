"""Identity value types: Key, RefValue and the Model base class."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Key:
    """Resolved primary key of a persisted entity.

    ``Key.NONE`` marks an entity that has not been persisted. It is a
    separate sentinel, so ``Key.of("id", None)`` is still a present key.
    """

    name: str
    value: Any

    NONE: ClassVar[Key]

    @classmethod
    def of(cls, name: str, value: Any) -> Key:
        return cls(name, value)

    @property
    def is_present(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return self.is_present


class _AbsentKey(Key):
    def __init__(self) -> None:
        super().__init__("", None)

    @property
    def is_present(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Key.NONE"


Key.NONE = _AbsentKey()


@dataclass(frozen=True)
class RefValue:
    """A foreign key plus an optional denormalized label read from a joined column."""

    ref: Key
    value: Any = None


class Model:
    """Base class for mapped entities.

    Every instance owns exactly one Key, which starts as ``Key.NONE`` and
    is replaced wholesale after an insert or when a row is mapped.
    """

    @property
    def key(self) -> Key:
        return getattr(self, "_key", Key.NONE)

    @key.setter
    def key(self, key: Key) -> None:
        if not isinstance(key, Key):
            raise TypeError(f"key must be a Key, not {type(key).__name__}")
        # object.__setattr__ also works for frozen dataclass entities
        object.__setattr__(self, "_key", key)

    @property
    def is_new(self) -> bool:
        return not self.key.is_present
