"""SQLAlchemy implementation of the Repository protocol."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import Mapper, Session

from sqla_gate.exceptions import ConfigurationError

__all__ = ["SQLAlchemyRepository"]

# Column types a string identity is converted to before querying.
_CONVERTIBLE: tuple[type, ...] = (int, uuid.UUID)


def _split_spec(spec: Any) -> list[list[str]]:
    """Normalize a preload spec into relationship paths.

    ``"author"`` -> ``[["author"]]``,
    ``["author.organization", "tags"]`` -> ``[["author", "organization"], ["tags"]]``.
    """
    if isinstance(spec, str):
        specs: Iterable[Any] = [spec]
    elif isinstance(spec, Iterable):
        specs = spec
    else:
        raise ConfigurationError(
            f"preload must be a relationship name or a list of them, got {spec!r}"
        )
    paths = []
    for item in specs:
        if not isinstance(item, str) or not item:
            raise ConfigurationError(f"Invalid preload entry {item!r}")
        paths.append(item.split("."))
    return paths


def _identity_type(model: type, field: str) -> type | None:
    mapper: Mapper[Any] = sa_inspect(model)
    if field not in mapper.column_attrs:
        raise ConfigurationError(f"{model.__name__} has no column {field!r}")
    try:
        python_type = mapper.column_attrs[field].columns[0].type.python_type
    except NotImplementedError:
        return None
    return python_type if python_type in _CONVERTIBLE else None


class SQLAlchemyRepository:
    """Fetch resources through a SQLAlchemy 2.0 :class:`~sqlalchemy.orm.Session`.

    Lookups use ``select(model).filter_by(...)``. Preloading walks the
    requested relationships on the loaded instances so they are
    populated before the session closes.

    Example::

        with Session(engine) as session:
            configure(repository=SQLAlchemyRepository(session), permission=can)
            ctx = load_resource(ctx, {"model": Post, "preload": "author.organization"})
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by(self, model: type, fields: Mapping[str, Any]) -> Any | None:
        """Return the first ``model`` row matching *fields*, or ``None``.

        A string identity that cannot be converted to the column type
        matches nothing.
        """
        criteria: dict[str, Any] = {}
        for name, value in fields.items():
            # Request parameters arrive as strings.
            python_type = _identity_type(model, name)
            if python_type is not None and isinstance(value, str):
                try:
                    value = python_type(value)
                except ValueError:
                    return None
            criteria[name] = value
        stmt = select(model).filter_by(**criteria)
        return self.session.execute(stmt).scalars().first()

    def get_all(self, model: type) -> list[Any]:
        """Return every ``model`` row."""
        return list(self.session.execute(select(model)).scalars().all())

    def preload(self, resource: Any, spec: Any) -> Any:
        """Load the relationships named by *spec* on *resource*.

        *resource* may be a single instance or a list of instances. The
        same object is returned.

        Raises:
            ConfigurationError: If a path names an unknown relationship.
        """
        paths = _split_spec(spec)
        items = resource if isinstance(resource, Sequence) else [resource]
        for item in items:
            for path in paths:
                self._walk(item, path)
        return resource

    def _walk(self, obj: Any, path: list[str]) -> None:
        if obj is None or not path:
            return
        name, rest = path[0], path[1:]
        mapper: Mapper[Any] = sa_inspect(type(obj))
        if name not in mapper.relationships:
            raise ConfigurationError(
                f"{type(obj).__name__} has no relationship {name!r} to preload"
            )
        value = getattr(obj, name)
        if mapper.relationships[name].uselist:
            for child in value:
                self._walk(child, rest)
        else:
            self._walk(value, rest)
