"""
codecschema - Convert runtime type descriptors into JSON schema documents.

Codecs from :mod:`codecschema.codecs` describe a data shape; this package
derives the equivalent JSON schema, breaking cycles in recursive codecs
with ``$defs`` and ``$ref``.
"""

from . import codecs
from .context import Context
from .generate import GenerateOptions, generate, to_json_schema

__version__ = "0.1.0"

__all__ = [
    # Conversion
    "to_json_schema",
    "generate",
    "GenerateOptions",
    "Context",
    # Descriptor submodule
    "codecs",
    # Version
    "__version__",
]
