"""Dependency graph construction and deletion ordering.

Stacks are linked through cross-stack exports: a stack importing another
stack's export must be deleted before the exporting stack.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Hashable, Iterable, Optional, TypeVar

from botocore.exceptions import BotoCoreError, ClientError
from rich.console import Console

from cfnctl.models.stack import ExportEdge, ImportEdge, StackRef

logger = logging.getLogger(__name__)

NodeT = TypeVar("NodeT", bound=Hashable)


class DependencyResolver:
    """Dependency graph between selected stacks.

    The graph maps each importing stack to the set of exporting stacks it
    depends on. Deletion order is computed with Kahn's algorithm so that
    importers come before their exporters.

    Attributes:
        graph: importer -> set of exporters
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.graph: dict[Any, set[Any]] = {}
        self.console = console or Console()

    def add_dependency(self, parent: Hashable, child: Hashable) -> None:
        """Record that child depends on parent (child is deleted first).

        Args:
            parent: Exporting stack
            child: Importing stack
        """
        if parent == child:
            return
        self.graph.setdefault(child, set()).add(parent)

    def build_from_exports(self, cfn_client: Any, stacks: list[StackRef]) -> None:
        """Build the graph from live export/import records.

        Only edges where both endpoints are in the given stacks are kept.

        Args:
            cfn_client: CloudFormation client
            stacks: Resolved selected stacks
        """
        self.console.print("🧠 Analyzing stack dependencies (Exports/Imports)...")
        by_id = {stack.stack_id: stack for stack in stacks}
        by_name = {stack.name: stack for stack in stacks}

        for export in self._list_exports(cfn_client):
            exporter = by_id.get(export.exporting_stack_id)
            if exporter is None:
                continue

            for edge in self._list_imports(cfn_client, export.export_name):
                # ListImports reports stack names; accept ids as well
                importer = by_id.get(edge.importing_stack_id) or by_name.get(edge.importing_stack_id)
                if importer is not None:
                    self.add_dependency(parent=exporter, child=importer)

    def _list_exports(self, cfn_client: Any) -> list[ExportEdge]:
        exports: list[ExportEdge] = []
        try:
            paginator = cfn_client.get_paginator("list_exports")
            for page in paginator.paginate():
                for export in page.get("Exports", []):
                    exports.append(
                        ExportEdge(exporting_stack_id=export["ExportingStackId"], export_name=export["Name"])
                    )
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Failed to list exports, ordering without dependencies: {e}")
            return []

        logger.debug(f"Gathered {len(exports)} exports")
        return exports

    def _list_imports(self, cfn_client: Any, export_name: str) -> list[ImportEdge]:
        imports: list[ImportEdge] = []
        try:
            paginator = cfn_client.get_paginator("list_imports")
            for page in paginator.paginate(ExportName=export_name):
                for importer in page.get("Imports", []):
                    imports.append(ImportEdge(export_name=export_name, importing_stack_id=importer))
        except (ClientError, BotoCoreError) as e:
            # Raised as a ValidationError when nothing imports the export
            logger.debug(f"No imports for export {export_name}: {e}")
            return []

        return imports

    def _blockers(self, nodes: list[NodeT]) -> dict[NodeT, set[NodeT]]:
        """Map each node to the selected importers that must be deleted before it."""
        selected = set(nodes)
        blockers: dict[NodeT, set[NodeT]] = {node: set() for node in nodes}
        for importer, exporters in self.graph.items():
            if importer not in selected:
                continue
            for exporter in exporters:
                if exporter in selected:
                    blockers[exporter].add(importer)
        return blockers

    def compute_deletion_order(self, resources: Iterable[NodeT]) -> list[NodeT]:
        """Compute a deletion order with importers before exporters.

        If a cycle leaves nodes that can never be released, the remaining nodes
        are appended in their input order and a warning is logged.

        Args:
            resources: Nodes to order, in selection order

        Returns:
            Every input node exactly once
        """
        nodes = list(dict.fromkeys(resources))
        blockers = self._blockers(nodes)

        queue = deque(node for node in nodes if not blockers[node])
        order: list[NodeT] = []

        while queue:
            node = queue.popleft()
            order.append(node)
            for exporter in self.graph.get(node, ()):
                pending = blockers.get(exporter)
                if pending and node in pending:
                    pending.discard(node)
                    if not pending:
                        queue.append(exporter)

        if len(order) < len(nodes):
            emitted = set(order)
            remainder = [node for node in nodes if node not in emitted]
            logger.warning(
                f"Circular dependency between {len(remainder)} stack(s); "
                f"appending them in selection order: {', '.join(map(_label, remainder))}"
            )
            order.extend(remainder)

        return order

    def has_cycle(self) -> bool:
        """Check whether the graph contains a circular dependency."""
        nodes = list(dict.fromkeys([*self.graph.keys(), *(p for ps in self.graph.values() for p in ps)]))
        visiting: set[Any] = set()
        done: set[Any] = set()

        def visit(node: Any) -> bool:
            if node in done:
                return False
            if node in visiting:
                return True
            visiting.add(node)
            if any(visit(parent) for parent in self.graph.get(node, ())):
                return True
            visiting.discard(node)
            done.add(node)
            return False

        return any(visit(node) for node in nodes)

    def get_deletion_tiers(self, resources: Iterable[NodeT]) -> dict[int, list[NodeT]]:
        """Group nodes into tiers that can be deleted once earlier tiers are gone.

        Tier 1 holds nodes nothing depends on. Nodes stuck in a cycle share the
        last tier.

        Args:
            resources: Nodes to group

        Returns:
            Mapping of tier number (1-based) to nodes
        """
        nodes = list(dict.fromkeys(resources))
        blockers = self._blockers(nodes)
        remaining = list(nodes)
        tiers: dict[int, list[NodeT]] = {}
        tier = 1

        while remaining:
            ready = [node for node in remaining if not blockers[node]]
            if not ready:
                tiers[tier] = remaining
                break
            tiers[tier] = ready
            for node in ready:
                for exporter in self.graph.get(node, ()):
                    if exporter in blockers:
                        blockers[exporter].discard(node)
            remaining = [node for node in remaining if node not in ready]
            tier += 1

        return tiers


def _label(node: Any) -> str:
    return node.name if isinstance(node, StackRef) else str(node)
