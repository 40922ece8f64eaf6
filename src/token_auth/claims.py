"""
Claims container carried inside a token body.

A plain ordered mapping with typed properties for the registered claims.
Registered claims that were never set read as their zero value; any other
key behaves like an ordinary dict entry.
"""

from collections.abc import Iterator, Mapping, MutableMapping
import copy
from typing import Any

ISSUER = "issuer"
AUDIENCE = "audience"
EXPIRE = "expire"
NOT_BEFORE = "nbf"
ISSUED_AT = "iat"
JTI = "jti"
PAYLOAD = "payload"

REGISTERED_DEFAULTS: dict[str, Any] = {
    ISSUER: "",
    AUDIENCE: "",
    EXPIRE: 0,
    NOT_BEFORE: 0,
    ISSUED_AT: 0,
    JTI: "",
    PAYLOAD: {},
}


class Claims(MutableMapping[str, Any]):
    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    # ----- Mapping protocol ----- #
    def __getitem__(self, key: str) -> Any:
        if key in self._data:
            return self._data[key]
        if key in REGISTERED_DEFAULTS:
            return copy.copy(REGISTERED_DEFAULTS[key])
        raise KeyError(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def has(self, key: str) -> bool:
        return key in self._data

    def is_set(self, key: str) -> bool:
        """Key is present and holds a non-null value."""
        return self._data.get(key) is not None

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @property
    def extensions(self) -> dict[str, Any]:
        return {k: v for k, v in self._data.items() if k not in REGISTERED_DEFAULTS}

    # ----- Registered claims ----- #
    @property
    def issuer(self) -> str:
        return str(self[ISSUER])

    @issuer.setter
    def issuer(self, value: str) -> None:
        self._data[ISSUER] = value

    @property
    def audience(self) -> str:
        """Subject the token was issued for, usually a user id."""
        value = self[AUDIENCE]
        return "" if value is None else str(value)

    @audience.setter
    def audience(self, value: Any) -> None:
        self._data[AUDIENCE] = str(value)

    @property
    def expire(self) -> int:
        return int(self[EXPIRE])

    @expire.setter
    def expire(self, value: int) -> None:
        self._data[EXPIRE] = value

    @property
    def not_before(self) -> int:
        return int(self[NOT_BEFORE])

    @not_before.setter
    def not_before(self, value: int) -> None:
        self._data[NOT_BEFORE] = value

    @property
    def issued_at(self) -> int:
        return int(self[ISSUED_AT])

    @issued_at.setter
    def issued_at(self, value: int) -> None:
        self._data[ISSUED_AT] = value

    @property
    def jti(self) -> str:
        return str(self[JTI])

    @jti.setter
    def jti(self, value: str) -> None:
        self._data[JTI] = value

    @property
    def payload(self) -> dict[str, Any]:
        return dict(self[PAYLOAD])

    @payload.setter
    def payload(self, value: Mapping[str, Any]) -> None:
        self._data[PAYLOAD] = dict(value)
