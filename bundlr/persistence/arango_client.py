"""ArangoDB client factory for Bundlr.

Connection pooling handled automatically by python-arango client.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from arango import ArangoClient
from arango.aql import AQL
from arango.database import StandardDatabase

# bind_vars must be JSON primitives; dates become ISO strings, anything else is rejected
_JSON_PRIMITIVES = (str, int, float, bool, type(None))


def _jsonify_for_arango(obj: Any, *, _path: str = "$") -> Any:
    """Recursively normalize bind_vars to JSON-serializable primitives.

    Raises:
        TypeError: If obj contains a non-serializable type (message names its path)
    """
    if isinstance(obj, _JSON_PRIMITIVES):
        return obj
    if isinstance(obj, date | datetime):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {str(k): _jsonify_for_arango(v, _path=f"{_path}.{k}") for k, v in obj.items()}
    if isinstance(obj, list | tuple):
        return [_jsonify_for_arango(v, _path=f"{_path}[{i}]") for i, v in enumerate(obj)]

    raise TypeError(
        f"Object at {_path} not JSON-serializable for Arango: {type(obj).__name__}. "
        f"Convert to primitive before passing to persistence layer."
    )


class _SafeAQL:
    """AQL wrapper that sanitizes bind_vars in execute()."""

    def __init__(self, aql: AQL) -> None:
        self._aql = aql

    def execute(
        self,
        query: str,
        bind_vars: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        return self._aql.execute(query, bind_vars=_jsonify_for_arango(bind_vars or {}), **kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._aql, name)


class SafeDatabase:
    """StandardDatabase wrapper whose `.aql` sanitizes bind_vars."""

    def __init__(self, db: StandardDatabase) -> None:
        self._db = db
        self._safe_aql = _SafeAQL(db.aql)

    @property
    def aql(self) -> _SafeAQL:
        return self._safe_aql

    def __getattr__(self, name: str) -> Any:
        return getattr(self._db, name)


DatabaseLike = StandardDatabase | SafeDatabase


def create_arango_client(
    hosts: str = "http://localhost:8529",
    username: str = "bundlr",
    password: str = "bundlr_password",
    db_name: str = "bundlr",
) -> SafeDatabase:
    """Create ArangoDB client and return a SafeDatabase handle.

    Raises:
        ServerConnectionError: If cannot connect to ArangoDB service
    """
    client = ArangoClient(hosts=hosts)
    db = client.db(db_name, username=username, password=password)
    return SafeDatabase(db)
