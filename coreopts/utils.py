"""
Coreopts utilities (small helpers shared by the spec model and the parser).

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided" when None is a meaningful value
    (an option default of None differs from no default at all).
  • Falsey, printable as "Unset", non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; keeps None/0/""/[] untouched.

- rename(callable, name) / @rename("name")
  • Stable __name__/__qualname__ for generated accessors and handlers.

- mirror("attr")
  • Read-only property over a private backing field (self._attr). Containers are
    handed out as immutable views so a spec cannot be mutated after construction.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Sentinel type for "not provided".

    - bool(Unset) is False, but Unset is neither None nor 0.
    - repr(Unset) is "Unset".
    - UnsetType() always returns the same instance; subclassing is refused.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `object` unless it is Unset, in which case return `default`.

    Examples
    - coalesce("always", "auto") -> "always"
    - coalesce(Unset, "auto")    -> "auto"
    - coalesce(None, "auto")     -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable (rename(f, "name")), or return a
    decorator doing so (@rename("name")).
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            callable.__qualname__ = name
            callable.__name__ = name
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    # dicts keep their insertion order; sets become frozensets; views built at
    # construction time are handed out as they are
    if isinstance(object, MappingProxyType | frozenset | tuple):
        return object
    if isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    if isinstance(object, Set):
        return frozenset(object)
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    return object


def mirror(name, /):
    """
    Define a read-only property returning an immutable view of self._{name}.

    Sequences come back as tuples, mappings as MappingProxyType and sets as
    frozensets; scalars are returned as-is.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "UnsetType",
    "Unset",
)
