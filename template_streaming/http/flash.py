"""One-shot notices carried across a redirect through the session."""

from collections.abc import Iterator, MutableMapping
from typing import Any


FLASH_SESSION_KEY = "_flash"


class Flash(MutableMapping[str, Any]):
    """Notices set by the previous request, readable during this one.

    Constructing a Flash sweeps the session: the stored notices move into
    this object and are removed from the session. Values assigned here are
    visible now and stored for the next request.
    """

    def __init__(self, session: MutableMapping[str, Any]) -> None:
        self._session = session
        self._notices: dict[str, Any] = dict(session.pop(FLASH_SESSION_KEY, None) or {})

    def __getitem__(self, key: str) -> Any:
        return self._notices[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._notices[key] = value
        self._session.setdefault(FLASH_SESSION_KEY, {})[key] = value

    def __delitem__(self, key: str) -> None:
        del self._notices[key]
        pending = self._session.get(FLASH_SESSION_KEY)
        if pending is not None:
            pending.pop(key, None)

    def __iter__(self) -> Iterator[str]:
        return iter(self._notices)

    def __len__(self) -> int:
        return len(self._notices)

    def __repr__(self) -> str:
        return f"Flash({self._notices!r})"
