"""
Immutable traversal state threaded through schema generation.

A :class:`Context` is never mutated: every ``extend_*`` and
``register_definition`` call returns a new value. Sibling subtrees that
start from the same Context therefore never observe definitions that
were registered inside one another.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

# (schema, codec, context) -> schema
Customizer = Callable[[Dict[str, Any], Any, "Context"], Dict[str, Any]]

__all__ = ["Context", "Customizer", "identity", "escape_pointer_segment"]


def identity(schema: Dict[str, Any], codec: Any, context: "Context") -> Dict[str, Any]:
    """The default customizer, returns ``schema`` untouched."""
    return schema


def escape_pointer_segment(segment: str) -> str:
    """Escape one JSON pointer reference token (RFC 6901)."""
    return str(segment).replace("~", "~0").replace("/", "~1")


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Context:
    """
    Where generation currently is, and what it has already defined.

    Attributes
    ----------
    codec_path : tuple of str
      Labels of the codecs visited so far, for diagnostics only
    schema_path : tuple of str
      JSON pointer segments locating the current node from the root
    definitions : mapping
      Recursive codec name -> root relative ``$ref`` of its definition
    customizer : callable
      Hook applied to every generated node
    """

    codec_path: Tuple[str, ...] = ()
    schema_path: Tuple[str, ...] = ()
    definitions: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    customizer: Customizer = identity

    @classmethod
    def with_defaults(cls, customizer: Optional[Customizer] = None) -> "Context":
        """A fresh context: empty paths, no definitions."""
        if customizer is None:
            return cls()
        return cls(customizer=customizer)

    def extend_codec_path(self, chunk: str) -> "Context":
        return replace(self, codec_path=self.codec_path + (chunk,))

    def extend_schema_path(self, chunks: Iterable[str]) -> "Context":
        return replace(self, schema_path=self.schema_path + tuple(str(c) for c in chunks))

    def extend_paths(self, codec: str, schema: Iterable[str]) -> "Context":
        """Extend both paths in one step."""
        return replace(
            self,
            codec_path=self.codec_path + (codec,),
            schema_path=self.schema_path + tuple(str(c) for c in schema),
        )

    def register_definition(self, name: str, path: str) -> "Context":
        definitions = dict(self.definitions)
        definitions[name] = path
        return replace(self, definitions=_frozen(definitions))

    def materialize_schema_path(self) -> str:
        """
        The current schema path as a root relative pointer.

        Returns
        -------
        pointer : str
          e.g. ``#/properties/foo/$defs/Foo``
        """
        return "#/" + "/".join(escape_pointer_segment(s) for s in self.schema_path)
