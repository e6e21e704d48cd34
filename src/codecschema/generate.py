"""
Derive a JSON-Schema style document from a codec tree.

Generation is a depth first walk dispatching on the codec ``tag``. Each
edge into a child codec extends the :class:`~codecschema.context.Context`
with the pointer segments leading to the child, so that recursive codecs
can be given ``$ref`` values relative to the document root.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from .codecs import Tag, label
from .context import Context, Customizer
from .utils import map_values

logger = logging.getLogger(__name__)

Schema = Dict[str, Any]

__all__ = ["GenerateOptions", "Schema", "generate", "to_json_schema"]


@dataclass(frozen=True)
class GenerateOptions:
    """Caller settable knobs of :func:`to_json_schema`."""

    # called as customizer(schema, codec, context) for every generated node
    customizer: Optional[Customizer] = None

    def __post_init__(self) -> None:
        if self.customizer is not None and not callable(self.customizer):
            raise TypeError(
                f"customizer must be callable, got {type(self.customizer).__name__}"
            )

    @classmethod
    def load(cls, options: Union["GenerateOptions", Mapping, None] = None) -> "GenerateOptions":
        """
        Normalize ``options`` into a GenerateOptions.

        Mappings are passed as keyword arguments, so unknown keys
        raise a ``TypeError``.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls(**options)
        raise TypeError(
            f"options must be a GenerateOptions or a mapping, got {type(options).__name__}"
        )


def _child(context: Context, codec: Any, *segments: str) -> Context:
    return context.extend_paths(label(codec), segments)


def _constant(shape: Schema) -> Callable[[Any, Context], Schema]:
    def handler(codec: Any, context: Context) -> Schema:
        # new dict every call, nodes are never shared between documents
        return dict(shape)

    return handler


def _literal(codec, context):
    return {"const": codec.value}


def _array(codec, context):
    return {
        "type": "array",
        "items": generate(codec.type, _child(context, codec.type, "items")),
    }


def _tuple(codec, context):
    return {
        "type": "array",
        "items": [
            generate(item, _child(context, item, "items", str(i)))
            for i, item in enumerate(codec.types)
        ],
        "minItems": len(codec.types),
        "maxItems": len(codec.types),
    }


def _properties(props: Mapping, context: Context) -> Schema:
    return map_values(
        props, lambda prop, key: generate(prop, _child(context, prop, "properties", key))
    )


def _object(codec, context):
    schema = {"type": "object", "properties": _properties(codec.props, context)}
    if codec.tag is not Tag.PARTIAL:
        schema["required"] = list(codec.props)
    if codec.tag is Tag.STRICT:
        schema["additionalProperties"] = False
    return schema


def _exact(codec, context):
    # the wrapped object contributes its shape at this same position
    schema = _object(codec.type, context.extend_codec_path(label(codec.type)))
    schema["additionalProperties"] = False
    return schema


def _dictionary(codec, context):
    return {
        "type": "object",
        "additionalProperties": generate(
            codec.codomain, _child(context, codec.codomain, "additionalProperties")
        ),
    }


def _combinator(keyword: str) -> Callable[[Any, Context], Schema]:
    def handler(codec, context):
        return {
            keyword: [
                generate(member, _child(context, member, keyword, str(i)))
                for i, member in enumerate(codec.types)
            ]
        }

    return handler


def _keyof(codec, context):
    if not codec.keys:
        return {}
    return {"enum": list(codec.keys)}


def _readonly(codec, context):
    # transparent: the wrapped codec produces the node
    return generate(codec.type, context.extend_codec_path(label(codec.type)))


def _recursive(codec, context):
    name = codec.name
    ref = context.definitions.get(name)
    if ref is not None:
        logger.debug("reusing definition %r via %s", name, ref)
        return context.customizer({"$ref": ref}, codec, context)

    # register before forcing the body, otherwise self references never end
    def_context = context.extend_schema_path(("$defs", name))
    ref = def_context.materialize_schema_path()
    def_context = def_context.register_definition(name, ref)
    logger.debug("registered definition %r at %s", name, ref)

    body = codec.resolve()
    schema = {
        "$ref": ref,
        "$defs": {name: generate(body, def_context.extend_codec_path(label(body)))},
    }
    return context.customizer(schema, codec, context)


# Tags whose handler returns the assembled shape of a node; generate()
# adds the description and runs the customizer afterwards.
_SHAPES: Dict[Tag, Callable[[Any, Context], Schema]] = {
    Tag.STRING: _constant({"type": "string"}),
    Tag.NUMBER: _constant({"type": "number"}),
    Tag.INTEGER: _constant({"type": "integer"}),
    Tag.BIGINT: _constant({"type": "number"}),
    Tag.BOOLEAN: _constant({"type": "boolean"}),
    Tag.NULL: _constant({"type": "null"}),
    Tag.UNDEFINED: _constant({}),
    Tag.VOID: _constant({}),
    Tag.UNKNOWN: _constant({}),
    Tag.ANY: _constant({}),
    Tag.NEVER: _constant({}),
    Tag.FUNCTION: _constant({}),
    Tag.REFINEMENT: _constant({}),
    Tag.ANY_ARRAY: _constant({"type": "array", "items": {}}),
    Tag.ANY_DICT: _constant({"type": "object"}),
    Tag.OBJECT: _constant({"type": "object"}),
    Tag.LITERAL: _literal,
    Tag.ARRAY: _array,
    Tag.READONLY_ARRAY: _array,
    Tag.TUPLE: _tuple,
    Tag.INTERFACE: _object,
    Tag.PARTIAL: _object,
    Tag.STRICT: _object,
    Tag.EXACT: _exact,
    Tag.DICTIONARY: _dictionary,
    Tag.UNION: _combinator("anyOf"),
    Tag.INTERSECTION: _combinator("allOf"),
    Tag.KEYOF: _keyof,
}

# Tags whose handler produces the final node by itself.
_RESOLVERS: Dict[Tag, Callable[[Any, Context], Schema]] = {
    Tag.READONLY: _readonly,
    Tag.RECURSIVE: _recursive,
}


def generate(codec: Any, context: Context) -> Schema:
    """
    Generate the schema node for ``codec`` at the position in ``context``.

    Parameters
    ----------
    codec : descriptor
      Any codec from :mod:`codecschema.codecs`
    context : Context
      Position, known definitions and customizer

    Returns
    -------
    schema : dict
      The generated node. Unsupported codecs give the empty schema.
    """
    tag = getattr(codec, "tag", None)

    resolver = _RESOLVERS.get(tag)
    if resolver is not None:
        return resolver(codec, context)

    shape = _SHAPES.get(tag)
    if shape is None:
        logger.debug("no schema rule for %r at %s", tag, context.materialize_schema_path())
        schema = {}
    else:
        schema = shape(codec, context)

    name = getattr(codec, "name", None)
    if name is not None:
        schema["description"] = name

    return context.customizer(schema, codec, context)


def to_json_schema(codec: Any, options: Union[GenerateOptions, Mapping, None] = None) -> Schema:
    """
    Build the JSON schema document describing ``codec``.

    Parameters
    ----------
    codec : descriptor
      Root codec of the document
    options : GenerateOptions or dict, optional
      ``{"customizer": fn}`` where ``fn(schema, codec, context)`` returns
      the node to use in place of ``schema``

    Returns
    -------
    schema : dict
      JSON compatible document.
    """
    opts = GenerateOptions.load(options)
    context = Context.with_defaults(customizer=opts.customizer)
    logger.debug("generating schema for %s", label(codec))
    return generate(codec, context)
