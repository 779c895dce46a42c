"""
Privileges and privilege sets.

A privilege is a capability with a fixed numeric code that is part of the
wire format. A PrivilegeSet maps privileges to expiry values and always
iterates in ascending code order, whatever order the entries were given in.
"""

from collections.abc import Mapping
from enum import IntEnum
from typing import Dict, Iterable, Iterator, Tuple, Union

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class Privilege(IntEnum):
    """Capabilities a token can grant. Codes must never be renumbered."""

    JOIN_CHANNEL = 1
    PUBLISH_AUDIO_STREAM = 2
    PUBLISH_VIDEO_STREAM = 3
    PUBLISH_DATA_STREAM = 4
    RTM_LOGIN = 1000


MEDIA_PRIVILEGES = (
    Privilege.JOIN_CHANNEL,
    Privilege.PUBLISH_AUDIO_STREAM,
    Privilege.PUBLISH_VIDEO_STREAM,
)

PrivilegeKey = Union[Privilege, int]


def _check_expiry(privilege: Privilege, expiry: int) -> int:
    # bool is an int subclass; True/False as an expiry is always a mistake
    if isinstance(expiry, bool) or not isinstance(expiry, int):
        raise ValueError(f"Expiry for {privilege.name} must be an integer, got {expiry!r}")
    if not INT32_MIN <= expiry <= INT32_MAX:
        raise ValueError(f"Expiry for {privilege.name} does not fit in 32 bits: {expiry}")
    return expiry


class PrivilegeSet(Mapping):
    """
    Immutable mapping of Privilege -> expiry.

    Keys may be given as Privilege members or as their raw codes; unknown
    codes are rejected. Iteration is always in ascending code order.

    Example:
        >>> privs = PrivilegeSet({Privilege.PUBLISH_AUDIO_STREAM: 60, 1: 60})
        >>> list(privs)
        [<Privilege.JOIN_CHANNEL: 1>, <Privilege.PUBLISH_AUDIO_STREAM: 2>]
    """

    __slots__ = ("_entries",)

    def __init__(
        self,
        entries: Union[Mapping, Iterable[Tuple[PrivilegeKey, int]], None] = None,
    ):
        items = entries.items() if isinstance(entries, Mapping) else (entries or ())
        collected: Dict[Privilege, int] = {}
        for key, expiry in items:
            try:
                privilege = Privilege(key)
            except ValueError:
                raise ValueError(f"Unknown privilege code: {key!r}") from None
            collected[privilege] = _check_expiry(privilege, expiry)
        self._entries = dict(sorted(collected.items()))

    @classmethod
    def messaging(cls, expiry: int) -> "PrivilegeSet":
        """Privileges for a messaging-service login token."""
        return cls({Privilege.RTM_LOGIN: expiry})

    @classmethod
    def media(cls, expiry: int) -> "PrivilegeSet":
        """Join plus audio/video publish, all sharing one expiry."""
        return cls((privilege, expiry) for privilege in MEDIA_PRIVILEGES)

    def with_privilege(self, privilege: PrivilegeKey, expiry: int) -> "PrivilegeSet":
        """Return a new set with ``privilege`` added or its expiry replaced."""
        merged = dict(self._entries)
        merged[privilege] = expiry
        return PrivilegeSet(merged)

    def __getitem__(self, key: PrivilegeKey) -> int:
        try:
            return self._entries[Privilege(key)]
        except ValueError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[Privilege]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __hash__(self) -> int:
        return hash(tuple(self._entries.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{p.name}: {e}" for p, e in self._entries.items())
        return f"PrivilegeSet({{{inner}}})"
