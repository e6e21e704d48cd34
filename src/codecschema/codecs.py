"""
Runtime type descriptors ("codecs") describing a data shape.

Every descriptor is a frozen dataclass carrying a ``tag`` from the closed
:class:`Tag` set, an optional human readable ``name`` and the children
that are specific to its variant. The schema generator in
:mod:`codecschema.generate` dispatches on the tag.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple


class Tag(str, enum.Enum):
    """Discriminant of a descriptor."""

    NULL = "null"
    UNDEFINED = "undefined"
    VOID = "void"
    UNKNOWN = "unknown"
    ANY = "any"
    NEVER = "never"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    LITERAL = "literal"
    ANY_ARRAY = "any_array"
    ANY_DICT = "any_dict"
    OBJECT = "object"
    FUNCTION = "function"
    REFINEMENT = "refinement"
    ARRAY = "array"
    READONLY_ARRAY = "readonly_array"
    TUPLE = "tuple"
    INTERFACE = "interface"
    PARTIAL = "partial"
    STRICT = "strict"
    EXACT = "exact"
    DICTIONARY = "dictionary"
    UNION = "union"
    INTERSECTION = "intersection"
    READONLY = "readonly"
    KEYOF = "keyof"
    RECURSIVE = "recursive"


# Tags that carry no children at all
PRIMITIVE_TAGS = frozenset(
    {
        Tag.NULL,
        Tag.UNDEFINED,
        Tag.VOID,
        Tag.UNKNOWN,
        Tag.ANY,
        Tag.NEVER,
        Tag.STRING,
        Tag.NUMBER,
        Tag.INTEGER,
        Tag.BIGINT,
        Tag.BOOLEAN,
        Tag.ANY_ARRAY,
        Tag.ANY_DICT,
        Tag.OBJECT,
        Tag.FUNCTION,
    }
)

# Object shaped tags holding a property mapping
PROPS_TAGS = frozenset({Tag.INTERFACE, Tag.PARTIAL, Tag.STRICT})


@dataclass(frozen=True)
class Primitive:
    """A descriptor without children (string, number, null, ...)."""

    tag: Tag
    name: Optional[str] = None

    def __post_init__(self):
        if self.tag not in PRIMITIVE_TAGS:
            raise ValueError(f"{self.tag!r} is not a primitive tag")

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Literal:
    """A single constant value."""

    value: Any
    name: Optional[str] = None
    tag: Tag = field(default=Tag.LITERAL, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Refinement:
    """A codec narrowed by an arbitrary predicate."""

    type: Any
    predicate: Callable[[Any], bool]
    name: Optional[str] = None
    tag: Tag = field(default=Tag.REFINEMENT, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class ArrayOf:
    """A homogeneous array, ``tag`` is either ARRAY or READONLY_ARRAY."""

    type: Any
    name: Optional[str] = None
    tag: Tag = Tag.ARRAY

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class TupleOf:
    """A fixed length array with one codec per position."""

    types: Tuple[Any, ...]
    name: Optional[str] = None
    tag: Tag = field(default=Tag.TUPLE, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Props:
    """
    An object described by a property mapping.

    ``tag`` decides the flavour: INTERFACE (every key required),
    PARTIAL (every key optional) or STRICT (required and closed).
    """

    props: Dict[str, Any]
    name: Optional[str] = None
    tag: Tag = Tag.INTERFACE

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Exact:
    """Closes an object codec so no unknown keys are allowed."""

    type: Props
    name: Optional[str] = None
    tag: Tag = field(default=Tag.EXACT, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Dictionary:
    """A string keyed map with a codec for keys and one for values."""

    domain: Any
    codomain: Any
    name: Optional[str] = None
    tag: Tag = field(default=Tag.DICTIONARY, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Union:
    types: Tuple[Any, ...]
    name: Optional[str] = None
    tag: Tag = field(default=Tag.UNION, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Intersection:
    types: Tuple[Any, ...]
    name: Optional[str] = None
    tag: Tag = field(default=Tag.INTERSECTION, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Readonly:
    """Marks a codec read-only; it describes the same data as the wrapped one."""

    type: Any
    name: Optional[str] = None
    tag: Tag = field(default=Tag.READONLY, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class KeyOf:
    """One of a fixed set of string keys."""

    keys: Tuple[str, ...]
    name: Optional[str] = None
    tag: Tag = field(default=Tag.KEYOF, init=False)

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


@dataclass(frozen=True)
class Recursive:
    """
    A named codec whose body may refer back to itself.

    The body is produced lazily by ``definition`` so that a codec can
    mention itself before it is fully built.
    """

    name: str
    definition: Callable[[], Any]
    tag: Tag = field(default=Tag.RECURSIVE, init=False)

    def resolve(self) -> Any:
        """Force the deferred body."""
        return self.definition()

    def is_(self, value: Any) -> bool:
        return is_valid(self, value)


__all__ = [
    "Tag",
    "Primitive",
    "Literal",
    "Refinement",
    "ArrayOf",
    "TupleOf",
    "Props",
    "Exact",
    "Dictionary",
    "Union",
    "Intersection",
    "Readonly",
    "KeyOf",
    "Recursive",
    "label",
    "is_valid",
    # builders
    "string",
    "number",
    "integer",
    "bigint",
    "boolean",
    "null",
    "undefined",
    "void",
    "unknown",
    "any_",
    "never",
    "function",
    "unknown_array",
    "unknown_record",
    "object_",
    "literal",
    "array",
    "readonly_array",
    "tuple_",
    "interface",
    "partial",
    "strict",
    "exact",
    "dictionary",
    "union",
    "intersection",
    "readonly",
    "keyof",
    "refinement",
    "recursion",
]


string = Primitive(Tag.STRING)
number = Primitive(Tag.NUMBER)
integer = Primitive(Tag.INTEGER)
bigint = Primitive(Tag.BIGINT)
boolean = Primitive(Tag.BOOLEAN)
null = Primitive(Tag.NULL)
undefined = Primitive(Tag.UNDEFINED)
void = Primitive(Tag.VOID)
unknown = Primitive(Tag.UNKNOWN)
any_ = Primitive(Tag.ANY)
never = Primitive(Tag.NEVER)
function = Primitive(Tag.FUNCTION)
unknown_array = Primitive(Tag.ANY_ARRAY)
unknown_record = Primitive(Tag.ANY_DICT)
object_ = Primitive(Tag.OBJECT)


def literal(value: Any, name: Optional[str] = None) -> Literal:
    return Literal(value, name=name)


def array(item: Any, name: Optional[str] = None) -> ArrayOf:
    return ArrayOf(item, name=name)


def readonly_array(item: Any, name: Optional[str] = None) -> ArrayOf:
    return ArrayOf(item, name=name, tag=Tag.READONLY_ARRAY)


def tuple_(items, name: Optional[str] = None) -> TupleOf:
    return TupleOf(tuple(items), name=name)


def interface(props: Mapping, name: Optional[str] = None) -> Props:
    return Props(dict(props), name=name, tag=Tag.INTERFACE)


def partial(props: Mapping, name: Optional[str] = None) -> Props:
    return Props(dict(props), name=name, tag=Tag.PARTIAL)


def strict(props: Mapping, name: Optional[str] = None) -> Props:
    return Props(dict(props), name=name, tag=Tag.STRICT)


def exact(codec: Props, name: Optional[str] = None) -> Exact:
    if getattr(codec, "tag", None) not in PROPS_TAGS:
        raise TypeError("exact() expects an interface, partial or strict codec")
    return Exact(codec, name=name)


def dictionary(domain: Any, codomain: Any, name: Optional[str] = None) -> Dictionary:
    return Dictionary(domain, codomain, name=name)


def union(members, name: Optional[str] = None) -> Union:
    return Union(tuple(members), name=name)


def intersection(members, name: Optional[str] = None) -> Intersection:
    return Intersection(tuple(members), name=name)


def readonly(codec: Any, name: Optional[str] = None) -> Readonly:
    return Readonly(codec, name=name)


def keyof(keys, name: Optional[str] = None) -> KeyOf:
    # accepts a mapping (its keys are used) or any iterable of strings
    return KeyOf(tuple(keys), name=name)


def refinement(
    codec: Any, predicate: Callable[[Any], bool], name: Optional[str] = None
) -> Refinement:
    return Refinement(codec, predicate, name=name)


def recursion(name: str, definition: Callable[[], Any]) -> Recursive:
    """
    Build a self-referential codec.

    Parameters
    ----------
    name : str
      Name of the codec, also used as its schema definition key
    definition : callable
      Zero-argument function returning the body, which is free to
      refer to the codec being defined

    Returns
    -------
    Recursive
      The named, lazily resolved codec.
    """
    return Recursive(name, definition)


def label(codec: Any) -> str:
    """A display label for ``codec``: its name, or its tag."""
    name = getattr(codec, "name", None)
    if name:
        return name
    tag = getattr(codec, "tag", None)
    if isinstance(tag, Tag):
        return tag.value
    return type(codec).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _props_valid(codec: Props, value: Any, closed: bool) -> bool:
    if not isinstance(value, Mapping):
        return False
    if closed and any(key not in codec.props for key in value):
        return False
    for key, prop in codec.props.items():
        if key not in value:
            if codec.tag is Tag.PARTIAL:
                continue
            return False
        if not is_valid(prop, value[key]):
            return False
    return True


def is_valid(codec: Any, value: Any) -> bool:
    """
    Check whether ``value`` is a member of the type described by ``codec``.

    Parameters
    ----------
    codec : descriptor
      Any descriptor from this module
    value : any
      A JSON-like Python value (dict, list, str, int, float, bool, None)

    Returns
    -------
    bool
      True if ``value`` matches ``codec``.
    """
    tag = getattr(codec, "tag", None)

    if tag in (Tag.NULL, Tag.UNDEFINED, Tag.VOID):
        return value is None
    elif tag in (Tag.UNKNOWN, Tag.ANY):
        return True
    elif tag is Tag.NEVER:
        return False
    elif tag is Tag.STRING:
        return isinstance(value, str)
    elif tag is Tag.NUMBER:
        return _is_number(value)
    elif tag in (Tag.INTEGER, Tag.BIGINT):
        return _is_int(value)
    elif tag is Tag.BOOLEAN:
        return isinstance(value, bool)
    elif tag is Tag.LITERAL:
        # True == 1 in Python, keep booleans apart from numbers
        return isinstance(value, bool) == isinstance(codec.value, bool) and value == codec.value
    elif tag is Tag.ANY_ARRAY:
        return _is_array(value)
    elif tag in (Tag.ANY_DICT, Tag.OBJECT):
        return isinstance(value, Mapping)
    elif tag is Tag.FUNCTION:
        return callable(value)
    elif tag is Tag.REFINEMENT:
        return is_valid(codec.type, value) and bool(codec.predicate(value))
    elif tag in (Tag.ARRAY, Tag.READONLY_ARRAY):
        return _is_array(value) and all(is_valid(codec.type, v) for v in value)
    elif tag is Tag.TUPLE:
        return (
            _is_array(value)
            and len(value) == len(codec.types)
            and all(is_valid(c, v) for c, v in zip(codec.types, value))
        )
    elif tag in (Tag.INTERFACE, Tag.PARTIAL):
        return _props_valid(codec, value, closed=False)
    elif tag is Tag.STRICT:
        return _props_valid(codec, value, closed=True)
    elif tag is Tag.EXACT:
        return _props_valid(codec.type, value, closed=True)
    elif tag is Tag.DICTIONARY:
        return isinstance(value, Mapping) and all(
            is_valid(codec.domain, k) and is_valid(codec.codomain, v)
            for k, v in value.items()
        )
    elif tag is Tag.UNION:
        return any(is_valid(c, value) for c in codec.types)
    elif tag is Tag.INTERSECTION:
        return all(is_valid(c, value) for c in codec.types)
    elif tag is Tag.READONLY:
        return is_valid(codec.type, value)
    elif tag is Tag.KEYOF:
        return isinstance(value, str) and value in codec.keys
    elif tag is Tag.RECURSIVE:
        return is_valid(codec.resolve(), value)

    return False
