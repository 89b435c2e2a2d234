"""Base classes for orphaned resource categories.

Each category knows how to discover one kind of billable resource and how to
delete a single item of that kind. The confirm-then-delete control flow lives in
ResourceSweeper and is shared by every category.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from cfnctl.models.deletion_record import DeletionRecord, ItemStatus, SweepItem
from cfnctl.teardown.prompts import Prompter


class ItemDeletionError(Exception):
    """Raised by a category when an item cannot be deleted for a non-API reason."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def error_details(error: Exception) -> tuple[str, str]:
    """Extract (code, message) from an exception raised while deleting."""
    if isinstance(error, ClientError):
        details = error.response.get("Error", {})
        return details.get("Code", "Unknown"), details.get("Message", str(error))
    if isinstance(error, ItemDeletionError):
        return error.code, error.message
    return type(error).__name__, str(error)


class SweepCategory(ABC):
    """Abstract base class for all sweep categories.

    Each category should:
    1. Have a unique name and a human-readable label
    2. Implement discover() returning every live item of its kind
    3. Implement delete_item() for a single item, raising on failure
    4. Override delete_items() only when the API accepts batches

    Attributes:
        session: boto3 session used to create clients
        region: AWS region swept
        prompter: Operator prompts (used by categories with protection flags)
        console: Rich console for operator output
    """

    emoji = "🧹"
    notice: Optional[str] = None

    def __init__(
        self,
        session: boto3.Session,
        region: str,
        prompter: Optional[Prompter] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.session = session
        self.region = region
        self.prompter = prompter or Prompter()
        self.console = console or Console()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._clients: dict[tuple[str, str], Any] = {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this category (e.g., "ec2-instances")."""

    @property
    @abstractmethod
    def label(self) -> str:
        """Plural label shown to the operator (e.g., "EC2 instances")."""

    @property
    @abstractmethod
    def service_name(self) -> str:
        """boto3 service name."""

    @property
    def confirm_message(self) -> str:
        return f"Delete ALL {self.label}?"

    def _create_client(self, service_name: Optional[str] = None, region: Optional[str] = None) -> Any:
        service = service_name or self.service_name
        region_name = region or self.region
        key = (service, region_name)
        if key not in self._clients:
            self._clients[key] = self.session.client(service, region_name=region_name)
        return self._clients[key]

    @abstractmethod
    def discover(self) -> list[SweepItem]:
        """Discover every live item in this category.

        Returns:
            Discovered items (empty list if none)
        """

    @abstractmethod
    def delete_item(self, item: SweepItem) -> Optional[str]:
        """Delete, release or schedule deletion of one item.

        Args:
            item: Item to delete

        Returns:
            Skip reason if the item was deliberately left in place, None otherwise

        Raises:
            Exception: Any failure; recorded against the item
        """

    def delete_items(self, items: list[SweepItem]) -> list[DeletionRecord]:
        """Attempt deletion of every item, recording each outcome.

        A failing item never stops the remaining ones.

        Args:
            items: Items confirmed for deletion

        Returns:
            One record per item
        """
        records = []
        for item in items:
            try:
                skip_reason = self.delete_item(item)
            except Exception as e:
                records.append(self._failed(item, e))
                continue

            if skip_reason:
                records.append(
                    DeletionRecord(category=self.name, item=item, status=ItemStatus.SKIPPED, skip_reason=skip_reason)
                )
            else:
                records.append(DeletionRecord(category=self.name, item=item, status=ItemStatus.SUCCEEDED))

        return records

    def _failed(self, item: SweepItem, error: Exception) -> DeletionRecord:
        code, message = error_details(error)
        self.logger.warning(f"Failed to delete {item} ({self.name}): {code} - {message}")
        self.console.print(f"   ⚠️ Could not delete {item}: {code} - {message}", style="yellow", markup=False)
        return DeletionRecord(
            category=self.name,
            item=item,
            status=ItemStatus.FAILED,
            error_code=code,
            error_message=message,
        )


@dataclass(frozen=True)
class ResourceKind:
    """List and delete calls for one resource kind.

    Attributes:
        list_method: Client method (or paginator name) listing the resources
        result_key: Response key holding the resource list
        id_key: Entry key holding the identifier (None when entries are plain strings)
        delete_method: Client method deleting one resource
        id_param: Parameter name of the delete call
        list_kwargs: Extra arguments for the list call
        paginated: Whether list_method has a paginator
        include: Optional predicate filtering listed entries
    """

    list_method: str
    result_key: str
    id_key: Optional[str]
    delete_method: str
    id_param: str
    list_kwargs: dict[str, Any] = field(default_factory=dict)
    paginated: bool = True
    include: Optional[Callable[[Any], bool]] = None


class ListedCategory(SweepCategory):
    """Category driven by a table of list/delete calls.

    Categories covering several resource kinds (Glue, Location) list each kind
    independently; a failing list call for one kind does not hide the others.
    Items of single-kind categories carry kind=None.
    """

    KINDS: dict[Optional[str], ResourceKind] = {}

    def discover(self) -> list[SweepItem]:
        client = self._create_client()
        items: list[SweepItem] = []

        for kind, spec in self.KINDS.items():
            try:
                entries = list(self._list_entries(client, spec))
            except (ClientError, BotoCoreError) as e:
                if len(self.KINDS) == 1:
                    raise
                self.logger.warning(f"Failed to list {kind or self.label}: {e}")
                continue

            for entry in entries:
                if spec.include is not None and not spec.include(entry):
                    continue
                identifier = entry[spec.id_key] if spec.id_key else entry
                items.append(SweepItem(identifier=identifier, kind=kind))

        return items

    @staticmethod
    def _list_entries(client: Any, spec: ResourceKind) -> Iterable[Any]:
        if spec.paginated:
            paginator = client.get_paginator(spec.list_method)
            for page in paginator.paginate(**spec.list_kwargs):
                yield from page.get(spec.result_key, [])
        else:
            response = getattr(client, spec.list_method)(**spec.list_kwargs)
            yield from response.get(spec.result_key, [])

    def delete_item(self, item: SweepItem) -> Optional[str]:
        spec = self.KINDS[item.kind]
        client = self._create_client()
        getattr(client, spec.delete_method)(**{spec.id_param: item.identifier})
        return None
