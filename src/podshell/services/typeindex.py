"""TypeRegistry: which container or instances hold records of a class.

One registration per ``(index_type, for_class)`` pair, stored in the
``typeIndexes`` table under the row id ``"{index_type}:{for_class}"``.
Class names go through the alias table first; an unknown short name raises
:class:`~podshell.domain.errors.UnknownClassError` for the caller to report.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from podshell.domain.records import (
    INDEX_TYPES,
    IndexType,
    Table,
    TypeIndexRow,
    encode_instances,
)
from podshell.domain.vocab import class_display_name, resolve_class_iri
from podshell.infrastructure.records import list_type_indexes, read_record, write_record
from podshell.infrastructure.store import TableStore

logger = logging.getLogger(__name__)


class TypeRegistration(BaseModel):
    """Read-only projection of one stored registration."""

    model_config = {"frozen": True}

    for_class: str
    class_display_name: str
    index_type: IndexType
    instances: list[str] = Field(default_factory=list)
    instance_container: str | None = None


class TypeLocations(BaseModel):
    """Every known location for a class across both indexes."""

    model_config = {"frozen": True}

    instances: list[str] = Field(default_factory=list)
    containers: list[str] = Field(default_factory=list)


def registration_id(index_type: str, for_class: str) -> str:
    return f"{index_type}:{for_class}"


def _project(row: TypeIndexRow) -> TypeRegistration:
    return TypeRegistration(
        for_class=row.for_class,
        class_display_name=class_display_name(row.for_class),
        index_type=row.index_type,
        instances=row.instances,
        instance_container=row.instance_container,
    )


class TypeRegistry:
    """Front end to the ``typeIndexes`` table."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def register(
        self,
        for_class: str,
        index_type: IndexType,
        instance: str | list[str] | None = None,
        instance_container: str | None = None,
    ) -> TypeRegistration:
        """Write (or overwrite) the registration for ``(index_type, for_class)``.

        Raises:
            UnknownClassError: *for_class* is an unknown short name.
            ValueError: Neither *instance* nor *instance_container* was given.
        """
        iri = resolve_class_iri(for_class)
        instances = [instance] if isinstance(instance, str) else list(instance or [])
        row = TypeIndexRow(
            for_class=iri,
            index_type=index_type,
            instance=encode_instances(instances) if instances else None,
            instance_container=instance_container,
        )
        write_record(self._store, Table.TYPE_INDEXES, registration_id(index_type, iri), row)
        logger.debug("registered %s in %s index", iri, index_type)
        return _project(row)

    def unregister(self, for_class: str, index_type: IndexType | None = None) -> bool:
        """Remove one registration, or both when *index_type* is omitted.

        Returns whether anything was removed.
        """
        iri = resolve_class_iri(for_class)
        targets = (index_type,) if index_type else INDEX_TYPES
        removed = False
        for kind in targets:
            row_id = registration_id(kind, iri)
            if self._store.has_row(Table.TYPE_INDEXES, row_id):
                self._store.del_row(Table.TYPE_INDEXES, row_id)
                removed = True
        return removed

    def add_instance(self, for_class: str, instance_url: str, index_type: IndexType) -> None:
        """Append *instance_url* to a registration, creating it if needed.

        Adding a locator that is already present is a no-op.
        """
        iri = resolve_class_iri(for_class)
        existing = self._get(index_type, iri)
        if existing is None:
            self.register(iri, index_type, instance=instance_url)
            return
        instances = existing.instances
        if instance_url in instances:
            return
        instances.append(instance_url)
        self._save(existing.model_copy(update={"instance": encode_instances(instances)}))

    def remove_instance(self, for_class: str, instance_url: str, index_type: IndexType) -> bool:
        """Remove *instance_url* from a registration.

        The registration itself is deleted when it is left with neither
        instances nor a container. Returns whether the locator was present.
        """
        iri = resolve_class_iri(for_class)
        existing = self._get(index_type, iri)
        if existing is None or instance_url not in existing.instances:
            return False

        remaining = [i for i in existing.instances if i != instance_url]
        row_id = registration_id(index_type, iri)
        if remaining:
            self._save(existing.model_copy(update={"instance": encode_instances(remaining)}))
        elif existing.instance_container:
            self._store.del_cell(Table.TYPE_INDEXES, row_id, "instance")
        else:
            self._store.del_row(Table.TYPE_INDEXES, row_id)
        return True

    def initialize_defaults(self, root: str) -> bool:
        """Seed the default class-to-container mappings into an empty registry.

        Returns False without writing when any registration already exists.
        """
        if not self._store.is_table_empty(Table.TYPE_INDEXES):
            return False
        defaults: list[tuple[str, str, IndexType]] = [
            ("foaf:Person", f"{root}personas/", "private"),
            ("vcard:Individual", f"{root}contacts/", "private"),
            ("vcard:Group", f"{root}groups/", "private"),
            ("org:Organization", f"{root}groups/", "public"),
        ]
        for alias, container, kind in defaults:
            self.register(alias, kind, instance_container=container)
        logger.debug("seeded %d default type registrations", len(defaults))
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def is_registered(self, for_class: str, index_type: IndexType | None = None) -> bool:
        iri = resolve_class_iri(for_class)
        targets = (index_type,) if index_type else INDEX_TYPES
        return any(
            self._store.has_row(Table.TYPE_INDEXES, registration_id(kind, iri)) for kind in targets
        )

    def list_all(self) -> list[TypeRegistration]:
        return [_project(row) for row in list_type_indexes(self._store).values()]

    def list_by_index_type(self, index_type: IndexType) -> list[TypeRegistration]:
        return [r for r in self.list_all() if r.index_type == index_type]

    def find_by_class(self, for_class: str) -> list[TypeRegistration]:
        iri = resolve_class_iri(for_class)
        return [r for r in self.list_all() if r.for_class == iri]

    def locations_for(self, for_class: str) -> TypeLocations:
        instances: list[str] = []
        containers: list[str] = []
        for reg in self.find_by_class(for_class):
            instances.extend(reg.instances)
            if reg.instance_container:
                containers.append(reg.instance_container)
        return TypeLocations(instances=instances, containers=containers)

    # ------------------------------------------------------------------

    def _get(self, index_type: IndexType, iri: str) -> TypeIndexRow | None:
        return read_record(
            self._store, Table.TYPE_INDEXES, registration_id(index_type, iri), TypeIndexRow
        )

    def _save(self, row: TypeIndexRow) -> None:
        write_record(
            self._store, Table.TYPE_INDEXES, registration_id(row.index_type, row.for_class), row
        )
