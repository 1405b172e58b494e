"""Saving selections into records.

Where a selection goes is decided once, by :func:`resolve_persist_target`,
which inspects the record and returns one of three targets:

* :class:`RelationTarget` when the field name is a relation. Saving
  replaces the relation's membership with exactly the selected ids.
* :class:`ScalarFieldTarget` when the field name is a plain attribute or
  column. Saving writes the JSON array encoding of the selection.
* :class:`NoTarget` otherwise. Saving does nothing; forms may carry
  fields that only exist in the UI.

SQLAlchemy mapped instances are inspected through their mapper. Any other
object may take part by exposing, under the field name, an object that
implements :class:`Relation`.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence, Union, runtime_checkable

from sqlalchemy import inspect, select
from sqlalchemy.exc import InvalidRequestError, NoInspectionAvailable
from sqlalchemy.orm import Mapper, object_session

from formfields.observability.logging import log_field_event
from formfields.values import as_key, encode_selection

logger = logging.getLogger(__name__)


@runtime_checkable
class Relation(Protocol):
    """A link set between one record and many others."""

    def ids(self) -> List[str]:
        ...

    def replace_membership(self, ids: Sequence[str]) -> None:
        ...


class SQLAlchemyRelation:
    """Adapt a mapped relationship attribute to the :class:`Relation` contract."""

    def __init__(self, record: Any, name: str) -> None:
        self.record = record
        self.name = name
        self._property = inspect(record).mapper.relationships[name]

    @property
    def _target_mapper(self) -> Mapper:
        return self._property.mapper

    @property
    def _id_key(self) -> str:
        mapper = self._target_mapper
        return mapper.get_property_by_column(mapper.primary_key[0]).key

    def _members(self) -> List[Any]:
        value = getattr(self.record, self.name)
        if value is None:
            return []
        if not self._property.uselist:
            return [value]
        return list(value)

    def ids(self) -> List[str]:
        key = self._id_key
        return [as_key(getattr(member, key)) for member in self._members()]

    def _coerce(self, ids: Sequence[str]) -> List[Any]:
        column = self._target_mapper.primary_key[0]
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            return list(ids)
        coerced = []
        for value in ids:
            try:
                coerced.append(python_type(value))
            except (TypeError, ValueError):
                logger.debug("Skipping id %r not convertible to %s", value, python_type.__name__)
        return coerced

    def replace_membership(self, ids: Sequence[str]) -> None:
        session = object_session(self.record)
        if session is None:
            raise InvalidRequestError(
                f"Cannot replace relation '{self.name}': instance is not attached to a session"
            )
        key = self._id_key
        target_class = self._target_mapper.class_
        id_attr = getattr(target_class, key)
        wanted = self._coerce(ids)
        loaded = session.scalars(select(target_class).where(id_attr.in_(wanted))).all() if wanted else []
        by_id = {as_key(getattr(member, key)): member for member in loaded}
        members = [by_id[as_key(value)] for value in wanted if as_key(value) in by_id]
        if len(members) != len(wanted):
            logger.debug(
                "Relation %s: %d of %d ids matched no record", self.name, len(wanted) - len(members), len(wanted)
            )
        if self._property.uselist:
            setattr(self.record, self.name, members)
        else:
            setattr(self.record, self.name, members[0] if members else None)


@dataclass(frozen=True)
class RelationTarget:
    relation: Relation


@dataclass(frozen=True)
class ScalarFieldTarget:
    record: Any
    name: str

    def assign(self, value: Any) -> None:
        if isinstance(self.record, MutableMapping):
            self.record[self.name] = value
        else:
            setattr(self.record, self.name, value)


@dataclass(frozen=True)
class NoTarget:
    pass


PersistTarget = Union[RelationTarget, ScalarFieldTarget, NoTarget]


def _mapper_of(record: Any) -> Optional[Mapper]:
    try:
        return inspect(record).mapper
    except (NoInspectionAvailable, AttributeError):
        return None


def resolve_persist_target(record: Any, field_name: Optional[str]) -> PersistTarget:
    """Decide where a field named ``field_name`` is stored on ``record``."""
    if not field_name or record is None:
        return NoTarget()

    mapper = _mapper_of(record)
    if mapper is not None:
        if field_name in mapper.relationships:
            return RelationTarget(SQLAlchemyRelation(record, field_name))
        if field_name in mapper.column_attrs:
            return ScalarFieldTarget(record, field_name)
        return NoTarget()

    if isinstance(record, MutableMapping):
        value = record.get(field_name)
        if isinstance(value, Relation):
            return RelationTarget(value)
        return ScalarFieldTarget(record, field_name) if field_name in record else NoTarget()

    if not hasattr(record, field_name):
        return NoTarget()
    value = getattr(record, field_name)
    if isinstance(value, Relation):
        return RelationTarget(value)
    return ScalarFieldTarget(record, field_name)


def save_selection(selected: Sequence[str], target: PersistTarget) -> None:
    """Write a normalized selection into ``target``.

    Relations are fully replaced; scalar fields receive the JSON array
    encoding. ORM errors propagate unchanged.
    """
    if isinstance(target, RelationTarget):
        log_field_event(
            "Replacing relation membership",
            field=getattr(target.relation, "name", type(target.relation).__name__),
            extras={"ids": list(selected)},
        )
        target.relation.replace_membership(list(selected))
    elif isinstance(target, ScalarFieldTarget):
        target.assign(encode_selection(selected))
    else:
        logger.debug("No persist target for selection %r", list(selected))


__all__ = [
    "NoTarget",
    "PersistTarget",
    "Relation",
    "RelationTarget",
    "SQLAlchemyRelation",
    "ScalarFieldTarget",
    "resolve_persist_target",
    "save_selection",
]
