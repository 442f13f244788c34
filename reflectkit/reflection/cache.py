"""Process-wide cache of type descriptors."""

import logging
from typing import Any

from .descriptor import TypeDescriptor
from .errors import TypeNotFound
from .names import resolve_qualname

logger = logging.getLogger(__name__)


class TypeCache:
    """Lazily built, never invalidated map from class to TypeDescriptor.

    Reads are plain dict lookups and never lock. A first build holds no
    lock either; it is published with ``dict.setdefault``, which is atomic,
    so concurrent first requests may build more than once but all callers
    end up with the single published descriptor afterwards. Because no lock
    is held while extracting, accessors and methods that reflect on other
    types re-enter the cache freely.
    """

    def __init__(self) -> None:
        self._descriptors: dict[type, TypeDescriptor] = {}
        self._names: dict[str, type] = {}

    def __contains__(self, identity: Any) -> bool:
        try:
            return self._lookup_type(identity) in self._descriptors
        except TypeNotFound:
            return False

    def __len__(self) -> int:
        return len(self._descriptors)

    def _lookup_type(self, identity: Any) -> type:
        if isinstance(identity, type):
            return identity
        if isinstance(identity, str):
            cls = self._names.get(identity)
            if cls is None:
                cls = self._names.setdefault(identity, resolve_qualname(identity))
            return cls
        raise TypeNotFound(identity, "not a class or a qualified name")

    def get(self, identity: type | str) -> TypeDescriptor:
        """Return the descriptor for a class or fully-qualified class name.

        Raises:
            TypeNotFound: if the identity does not resolve to exactly one class.
        """
        cls = self._lookup_type(identity)

        descriptor = self._descriptors.get(cls)
        if descriptor is not None:
            return descriptor

        built = TypeDescriptor.build(cls)
        descriptor = self._descriptors.setdefault(cls, built)
        if descriptor is built:
            logger.debug("Built type descriptor for %s", cls.__qualname__)
        else:
            logger.debug("Discarded duplicate descriptor build for %s", cls.__qualname__)
        return descriptor


_g_cache = TypeCache()


def get_type_info(identity: type | str) -> TypeDescriptor:
    """Return the cached descriptor for a class or fully-qualified class name."""
    return _g_cache.get(identity)


def default_cache() -> TypeCache:
    return _g_cache
