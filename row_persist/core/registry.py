"""Descriptor registry - resolves and caches mapping descriptors per entity type.

One registry is constructed at startup and handed to the row mapper and
repositories. Descriptors are immutable once cached.
"""

from __future__ import annotations

import logging
import threading

from row_persist.core.exceptions import DescriptorError
from row_persist.mapping.descriptor import MappingDescriptor
from row_persist.mapping.resolver import build_descriptor

logger = logging.getLogger(__name__)


class DescriptorRegistry:
    """Resolves and caches MappingDescriptors keyed by entity type.

    Reads of cached descriptors take no lock. First resolution of a type
    happens under a re-entrant lock, so concurrent callers build it once
    and only ever observe complete descriptors. Embedded reference types are
    resolved together with their owner; self- and mutually-referencing
    types are supported.
    """

    def __init__(self) -> None:
        self._descriptors: dict[type, MappingDescriptor] = {}
        self._resolving: set[type] = set()
        self._lock = threading.RLock()

    def resolve(self, entity_type: type) -> MappingDescriptor:
        """Return the descriptor for *entity_type*, building it on first use.

        Raises:
            DescriptorError: If the type's mapping annotations are missing or invalid.
        """
        descriptor = self._descriptors.get(entity_type)
        if descriptor is not None:
            return descriptor

        with self._lock:
            descriptor = self._descriptors.get(entity_type)
            if descriptor is not None:
                return descriptor
            descriptor = build_descriptor(entity_type)
            self._resolving.add(entity_type)
            try:
                for binding in descriptor.fields:
                    target = binding.referenced_type
                    if (
                        binding.is_embedded
                        and target is not None
                        and target not in self._descriptors
                        and target not in self._resolving
                    ):
                        self.resolve(target)
            finally:
                self._resolving.discard(entity_type)
            self._descriptors[entity_type] = descriptor
            logger.debug(
                "Resolved mapping for %s: table=%s key=%s columns=%s",
                descriptor.entity_name,
                descriptor.table,
                descriptor.primary_key,
                descriptor.column_names,
            )
            return descriptor

    def register(self, descriptor: MappingDescriptor) -> MappingDescriptor:
        """Add a descriptor built with the mapping DSL.

        Registering the same content twice is a no-op.

        Raises:
            DescriptorError: If a different descriptor is already registered for the type.
        """
        with self._lock:
            existing = self._descriptors.get(descriptor.entity_type)
            if existing is not None:
                if existing != descriptor:
                    raise DescriptorError(
                        descriptor.entity_name, "a different mapping is already registered"
                    )
                return existing
            self._descriptors[descriptor.entity_type] = descriptor
            logger.debug("Registered mapping for %s", descriptor.entity_name)
            return descriptor

    def clear(self) -> None:
        """Drop all cached descriptors."""
        with self._lock:
            self._descriptors.clear()

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._descriptors

    def __len__(self) -> int:
        """Number of cached descriptors."""
        return len(self._descriptors)
