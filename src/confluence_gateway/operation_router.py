"""Routing of logical operations to Confluence wire versions.

The base mapping sends CQL search to the legacy API and every structural
operation to REST API v2. A router can override individual operations at
construction, be reconfigured later, and be reset to the base mapping.

Routers are plain objects: build one per gateway rather than sharing the
module-level default_operation_router, which exists only for convenience.
"""

import logging
from typing import Dict, List, Mapping, Optional, Union

from .models import Operation, WireVersion

logger = logging.getLogger(__name__)

BASE_OPERATION_MAP: Mapping[Operation, WireVersion] = {
    # Legacy REST API (CQL support)
    Operation.SEARCH: WireVersion.LEGACY,

    # REST API v2
    Operation.GET_SPACES: WireVersion.MODERN,
    Operation.GET_PAGE: WireVersion.MODERN,
    Operation.CREATE_PAGE: WireVersion.MODERN,
    Operation.UPDATE_PAGE: WireVersion.MODERN,
    Operation.GET_PAGE_COMMENTS: WireVersion.MODERN,
    Operation.DELETE_PAGE: WireVersion.MODERN,
    Operation.GET_SPACE: WireVersion.MODERN,
    Operation.CREATE_SPACE: WireVersion.MODERN,
    Operation.UPDATE_SPACE: WireVersion.MODERN,
}

OperationKey = Union[Operation, str]
VersionKey = Union[WireVersion, str]


class OperationRouter:
    """Decides which wire version serves each logical operation.

    Attributes:
        fallback: Version used for operations missing from the mapping

    Example:
        >>> router = OperationRouter()
        >>> router.version_for(Operation.SEARCH)
        <WireVersion.LEGACY: 'v1'>
        >>> router = OperationRouter(overrides={"getPage": "v1"})
        >>> router.is_legacy("getPage")
        True
    """

    def __init__(
        self,
        overrides: Optional[Mapping[OperationKey, Optional[VersionKey]]] = None,
        fallback: VersionKey = WireVersion.MODERN,
    ):
        """Initialize the router.

        Args:
            overrides: Per-operation versions applied over the base mapping;
                None values are ignored
            fallback: Version for operations that are not mapped

        Raises:
            ValueError: If an override or the fallback names an unknown version
        """
        self._operation_map: Dict[str, WireVersion] = _base_map()
        for operation, version in (overrides or {}).items():
            if version:
                self._operation_map[_operation_key(operation)] = WireVersion(version)
        self.fallback = WireVersion(fallback)

    def version_for(self, operation: OperationKey) -> WireVersion:
        """Get the wire version for an operation (fallback if unmapped)."""
        return self._operation_map.get(_operation_key(operation), self.fallback)

    def is_legacy(self, operation: OperationKey) -> bool:
        return self.version_for(operation) is WireVersion.LEGACY

    def is_modern(self, operation: OperationKey) -> bool:
        return self.version_for(operation) is WireVersion.MODERN

    def operations_for(self, version: VersionKey) -> List[str]:
        """List the operation names currently mapped to a version."""
        version = WireVersion(version)
        return [op for op, mapped in self._operation_map.items() if mapped is version]

    def mapping(self) -> Dict[str, WireVersion]:
        """Return a copy of the current operation -> version mapping."""
        return dict(self._operation_map)

    def set_version(self, operation: OperationKey, version: VersionKey) -> None:
        """Route an operation to a different version from now on."""
        key = _operation_key(operation)
        self._operation_map[key] = WireVersion(version)
        logger.debug(f"Routing {key} to {self._operation_map[key].value}")

    def reset(self) -> None:
        """Restore the base mapping, dropping overrides and custom operations."""
        self._operation_map = _base_map()

    def distribution(self) -> Dict[str, int]:
        """Count mapped operations per version, e.g. {"v1": 1, "v2": 9}."""
        counts = {version.value: 0 for version in WireVersion}
        for version in self._operation_map.values():
            counts[version.value] += 1
        return counts


def create_default_router() -> OperationRouter:
    """Build a router with the base mapping and a modern fallback."""
    return OperationRouter()


def _base_map() -> Dict[str, WireVersion]:
    return {op.value: version for op, version in BASE_OPERATION_MAP.items()}


def _operation_key(operation: OperationKey) -> str:
    return operation.value if isinstance(operation, Operation) else str(operation)


default_operation_router = create_default_router()
