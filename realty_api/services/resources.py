"""Generic create/read/update/delete logic shared by every resource.

Each resource is described once by a ``ResourceConfig``; a
``ResourceService`` applies that description to one request: it
validates the payload, checks natural keys and references, writes the
row with its child collections and coordinates uploaded media with the
transaction.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

from fastapi import BackgroundTasks, UploadFile
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from realty_api.core.exceptions import (
    BadRequestException,
    ConflictException,
    DatabaseException,
    DependencyBlockedException,
    NotFoundException,
)
from realty_api.models.base import Base
from realty_api.models.media import Image
from realty_api.services.media import GALLERY, MediaChangeSet, MediaSlot, MediaStorage
from realty_api.services.repository import Repository
from realty_api.utils.text import capitalize_words

logger = logging.getLogger(__name__)

CREATE = "create"
LIST = "list"
SEARCH = "search"
GET = "get"
UPDATE = "update"
DELETE = "delete"
REASSIGN_AGENT = "reassign_agent"

CRUD = frozenset({CREATE, LIST, SEARCH, GET, UPDATE, DELETE})

# Search operators
CONTAINS = "contains"
EQUALS = "eq"
AT_MOST = "lte"
AT_LEAST = "gte"
FLAG = "flag"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ChildCollection:
    """An ordered list of titles stored as child rows, e.g. views."""

    attr: str
    model: Type[Base]
    capitalize: bool = True


@dataclass(frozen=True)
class Reference:
    """A foreign key that must point at an existing row."""

    field: str
    model: Type[Base]
    label: str


@dataclass(frozen=True)
class Dependent:
    """Rows that block deletion while they point at the record."""

    model: Type[Base]
    column: str
    label: str


@dataclass(frozen=True)
class Parent:
    """Owner of a nested resource, e.g. the property of a sale unit."""

    model: Type[Base]
    field: str
    path: str
    label: str


@dataclass(frozen=True)
class MediaPeer:
    """Another resource storing one slot's files in the same directory.

    Properties and projects both keep fact sheets in ``factSheets/``,
    so a key may only own a file there for one of them at a time.
    """

    field: str
    model: Type[Base]
    key: str
    attr: str
    label: str


@dataclass
class ResourceConfig:
    """Declarative description of one REST resource.

    Attributes:
        path: URL segment, e.g. ``sale-units``.
        model: Mapped class.
        label: Singular name used in messages, e.g. ``Sale unit``.
        plural: Plural name used in messages.
        create_schema: Payload schema for create.
        update_schema: Payload schema for update; defaults to create_schema.
        response_schema: Schema used to serialize rows.
        display_field: Field naming the record in messages.
        natural_keys: Groups of fields that must be unique together.
        capitalize: Scalar fields normalized with ``capitalize_words``.
        children: Title collections replaced on every update.
        includes: Relationship paths eagerly loaded for responses.
        search_fields: Searchable field name to operator.
        references: Foreign keys validated before writing.
        dependents: Rows that block deletion.
        parents: Owners for nested create/list/search routes.
        media: Upload slots.
        media_key: Field naming media files and directories.
        media_peers: Resources sharing a media directory with this one.
        operations: Enabled operations.
        prepare: Hook turning validated values into column values.
    """

    path: str
    model: Type[Base]
    label: str
    plural: str
    create_schema: Type[BaseModel]
    response_schema: Type[BaseModel]
    update_schema: Optional[Type[BaseModel]] = None
    display_field: str = "title"
    natural_keys: Tuple[Tuple[str, ...], ...] = ()
    capitalize: Tuple[str, ...] = ()
    children: Tuple[ChildCollection, ...] = ()
    includes: Tuple[str, ...] = ()
    search_fields: Dict[str, str] = field(default_factory=dict)
    references: Tuple[Reference, ...] = ()
    dependents: Tuple[Dependent, ...] = ()
    parents: Tuple[Parent, ...] = ()
    media: Tuple[MediaSlot, ...] = ()
    media_key: Optional[str] = None
    media_peers: Tuple[MediaPeer, ...] = ()
    operations: frozenset = CRUD
    prepare: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None

    @property
    def tag(self) -> str:
        return self.plural.title()

    @property
    def write_includes(self) -> Tuple[str, ...]:
        """Collections that must be loaded before they are replaced."""
        names = [child.attr for child in self.children]
        names += [slot.attr for slot in self.media if slot.kind == GALLERY]
        return tuple(dict.fromkeys(names))


@dataclass
class Payload:
    """Request body split into plain values and uploaded files."""

    data: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, List[UploadFile]] = field(default_factory=dict)


def validate_payload(schema: Type[BaseModel], data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a request body against ``schema``.

    Raises:
        BadRequestException: With the failing fields in ``details``.
    """
    try:
        return schema.model_validate(data).model_dump()
    except ValidationError as e:
        raise BadRequestException(details={"errors": describe_errors(e.errors())})


def describe_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Reduce pydantic errors to JSON-safe ``field``/``message`` pairs."""
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in errors
    ]


def _parse_number(name: str, value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise BadRequestException(f"Invalid value for {name}: {value}")
    # float() also accepts nan and inf
    if not math.isfinite(number):
        raise BadRequestException(f"Invalid value for {name}: {value}")
    return number


def _parse_flag(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise BadRequestException(f"Invalid value for {name}: {value}")


async def commit_changes(
    db: AsyncSession,
    label: str,
    changes: Optional[MediaChangeSet] = None,
) -> None:
    """Flush, move staged media into place, then commit.

    A unique or foreign key violation is reported as a conflict.

    Args:
        db: Session holding the pending writes.
        label: Resource name used in the error message.
        changes: Staged media promoted between flush and commit.

    Raises:
        ConflictException: On an integrity error.
        DatabaseException: On any other database failure.
    """
    try:
        await db.flush()
        if changes is not None:
            changes.promote()
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Integrity error on {label}: {e.orig}")
        raise ConflictException(f"{label} conflicts with an existing record.")
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database error on {label}: {e}")
        raise DatabaseException(f"Failed to save {label.lower()}.")


class ResourceService:
    """Runs the configured operations for one request.

    Args:
        config: Resource description.
        db: Request scoped session.
        storage: Media storage rooted at the uploads directory.
    """

    def __init__(
        self,
        config: ResourceConfig,
        db: AsyncSession,
        storage: MediaStorage,
    ) -> None:
        self.config = config
        self.db = db
        self.storage = storage
        self.repo = Repository(db, config.model, config.includes)

    # Lookups

    async def get(self, item_id: str) -> Base:
        return await self.repo.get_or_404(item_id, self.config.label)

    async def list(self, limit: int, conditions: Sequence[Any] = ()) -> Sequence[Base]:
        items = await self.repo.list(conditions, limit)
        if not items:
            raise NotFoundException(f"No {self.config.plural} found!")
        return items

    async def search(
        self,
        params: Dict[str, str],
        limit: int,
        conditions: Sequence[Any] = (),
    ) -> Sequence[Base]:
        """Filter rows with one predicate per query parameter.

        Args:
            params: Query parameters other than ``limit``.
            limit: Maximum rows returned.
            conditions: Extra predicates, e.g. the parent filter.
        """
        if not params:
            raise BadRequestException("No search parameters provided.")

        unknown = sorted(set(params) - set(self.config.search_fields))
        if unknown:
            raise BadRequestException(
                f"Unknown search parameters: {', '.join(unknown)}",
                details={"allowed": sorted(self.config.search_fields)},
            )

        predicates = list(conditions)
        for name, value in params.items():
            column = getattr(self.config.model, name)
            operator = self.config.search_fields[name]
            if operator == CONTAINS:
                predicates.append(column.icontains(value, autoescape=True))
            elif operator == AT_MOST:
                predicates.append(column <= _parse_number(name, value))
            elif operator == AT_LEAST:
                predicates.append(column >= _parse_number(name, value))
            elif operator == FLAG:
                predicates.append(column == _parse_flag(name, value))
            else:
                predicates.append(column == value)

        return await self.list(limit, predicates)

    async def require_parent(self, parent: Parent, parent_id: str) -> None:
        if not await Repository(self.db, parent.model).exists(parent_id):
            raise NotFoundException(
                f"{parent.label} not found!",
                details={"id": parent_id},
            )

    # Writes

    async def create(
        self,
        payload: Payload,
        background_tasks: BackgroundTasks,
        parent_values: Optional[Dict[str, str]] = None,
    ) -> Base:
        """Insert a record with its child rows and media.

        Raises:
            BadRequestException: On a missing or invalid field.
            NotFoundException: When a referenced row does not exist.
            ConflictException: When a natural key is taken.
        """
        config = self.config
        values = validate_payload(config.create_schema, payload.data)
        values.update(parent_values or {})
        self._normalize(values)

        for slot in config.media:
            if slot.required_on_create and not payload.files.get(slot.field):
                raise BadRequestException(details={"missing": [slot.field]})

        await self._check_references(values)
        await self._check_natural_keys(values)

        children = {child.attr: values.pop(child.attr, []) for child in config.children}
        if config.prepare:
            values = config.prepare(values)

        item = config.model(**values)
        for child in config.children:
            setattr(item, child.attr, self._build_children(child, children[child.attr]))

        changes = MediaChangeSet(self.storage)
        try:
            if config.media_key:
                await self._stage_media(item, values[config.media_key], payload, changes)
            self.repo.add(item)
            await commit_changes(self.db, self.config.label, changes)
        except Exception:
            changes.revert()
            raise
        changes.schedule_cleanup(background_tasks)

        logger.info(f"Created {config.label} {item.id}")
        return item

    async def update(
        self,
        item_id: str,
        payload: Payload,
        background_tasks: BackgroundTasks,
    ) -> Base:
        """Replace a record's fields, child rows and (optionally) media.

        Child collections are deleted and recreated. Media is replaced
        when new files are uploaded; otherwise it is moved when the
        natural key changes and image URLs are rewritten to match.
        """
        config = self.config
        writer = Repository(self.db, config.model, config.write_includes)
        item = await writer.get_or_404(item_id, config.label)

        values = validate_payload(config.update_schema or config.create_schema, payload.data)
        self._normalize(values)
        await self._check_references(values)
        await self._check_natural_keys(values, exclude_id=item_id)

        old_key = getattr(item, config.media_key) if config.media_key else None
        children = {child.attr: values.pop(child.attr, []) for child in config.children}
        if config.prepare:
            values = config.prepare(values)

        for name, value in values.items():
            setattr(item, name, value)
        for child in config.children:
            setattr(item, child.attr, self._build_children(child, children[child.attr]))

        changes = MediaChangeSet(self.storage)
        try:
            if config.media_key:
                new_key = getattr(item, config.media_key)
                await self._stage_media(item, new_key, payload, changes, old_key=old_key)
            await commit_changes(self.db, self.config.label, changes)
        except Exception:
            changes.revert()
            raise
        changes.schedule_cleanup(background_tasks)

        logger.info(f"Updated {config.label} {item.id}")
        return item

    async def delete(self, item_id: str, background_tasks: BackgroundTasks) -> Base:
        """Delete a record and, after the commit, its media.

        Raises:
            NotFoundException: If the record does not exist.
            DependencyBlockedException: While dependents reference it.
        """
        config = self.config
        item = await Repository(self.db, config.model).get_or_404(item_id, config.label)

        for dependent in config.dependents:
            count = await self.repo.count_where(dependent.model, dependent.column, item_id)
            if count:
                raise DependencyBlockedException(
                    f"{config.label} {self.display(item)} still has "
                    f"{count} {dependent.label}, delete them first!",
                    details={"dependents": dependent.label, "count": count},
                )

        key = getattr(item, config.media_key) if config.media_key else None
        owned = [slot.target(key) for slot in config.media if self._owns_media(item, slot)]
        await self.repo.delete(item)
        await commit_changes(self.db, self.config.label)

        for target in owned:
            background_tasks.add_task(self.storage.discard, self.storage.path_for(target))

        logger.info(f"Deleted {config.label} {item_id}")
        return item

    async def reassign_agent(self, item_id: str, agent_id: str, agent_model: Type[Base]) -> Tuple[Base, Base]:
        item = await Repository(self.db, self.config.model).get_or_404(item_id, self.config.label)
        agent = await Repository(self.db, agent_model).get_or_404(agent_id, "Agent")
        item.agent_id = agent.id
        await commit_changes(self.db, self.config.label)
        return item, agent

    def display(self, item: Base) -> str:
        return str(getattr(item, self.config.display_field, item.id))

    # Helpers

    def _normalize(self, values: Dict[str, Any]) -> None:
        for name in self.config.capitalize:
            if values.get(name):
                values[name] = capitalize_words(values[name])

    def _build_children(self, child: ChildCollection, titles: List[str]) -> List[Base]:
        return [
            child.model(
                title=capitalize_words(title) if child.capitalize else title,
                position=position,
            )
            for position, title in enumerate(titles)
        ]

    async def _check_references(self, values: Dict[str, Any]) -> None:
        for reference in self.config.references:
            ref_id = values.get(reference.field)
            if ref_id and not await Repository(self.db, reference.model).exists(ref_id):
                raise NotFoundException(
                    f"{reference.label} not found!",
                    details={reference.field: ref_id},
                )

    async def _check_natural_keys(
        self,
        values: Dict[str, Any],
        exclude_id: Optional[str] = None,
    ) -> None:
        for group in self.config.natural_keys:
            lookup = {name: values[name] for name in group if name in values}
            if len(lookup) != len(group):
                continue
            if await self.repo.find_by(lookup, exclude_id=exclude_id):
                shown = ", ".join(str(value) for value in lookup.values())
                raise ConflictException(
                    f"{self.config.label} {shown} already exists!",
                    details={"fields": list(group)},
                )

    async def _stage_media(
        self,
        item: Base,
        key: str,
        payload: Payload,
        changes: MediaChangeSet,
        old_key: Optional[str] = None,
    ) -> None:
        for slot in self.config.media:
            uploads = payload.files.get(slot.field)
            # Only media this record already owns is moved or removed
            relocate = (
                old_key is not None
                and slot.target(old_key) != slot.target(key)
                and self._owns_media(item, slot)
            )
            if uploads or relocate:
                await self._check_media_peers(slot, key)

            if uploads:
                urls = await changes.stage_uploads(slot, key, uploads)
                if slot.kind == GALLERY:
                    setattr(item, slot.attr, [
                        Image(url=url, position=position)
                        for position, url in enumerate(urls)
                    ])
                else:
                    setattr(item, slot.attr, urls[0])
                if relocate:
                    changes.delete(slot.target(old_key))
            elif relocate:
                self._move_media(item, slot, old_key, key, changes)

    def _owns_media(self, item: Base, slot: MediaSlot) -> bool:
        """Whether the record has a file in ``slot``; galleries always own their directory."""
        return slot.kind == GALLERY or bool(getattr(item, slot.attr))

    async def _check_media_peers(self, slot: MediaSlot, key: str) -> None:
        """Refuse a media path already owned by a row of another resource.

        Raises:
            ConflictException: If a peer with the same key has a file in the slot.
        """
        for peer in self.config.media_peers:
            if peer.field != slot.field:
                continue
            with self.db.no_autoflush:
                taken = await Repository(self.db, peer.model).list(
                    [getattr(peer.model, peer.key) == key, getattr(peer.model, peer.attr).is_not(None)],
                    limit=1,
                )
            if taken:
                raise ConflictException(
                    f"{peer.label} {key} already uses {slot.target(key)}!",
                    details={"field": slot.field},
                )

    def _move_media(
        self,
        item: Base,
        slot: MediaSlot,
        old_key: str,
        new_key: str,
        changes: MediaChangeSet,
    ) -> None:
        new_target = slot.target(new_key)
        changes.rename(slot.target(old_key), new_target)
        if slot.kind == GALLERY:
            for image in getattr(item, slot.attr):
                filename = image.url.rsplit("/", 1)[-1]
                image.url = self.storage.url_for(f"{new_target}/{filename}")
        else:
            setattr(item, slot.attr, self.storage.url_for(new_target))
