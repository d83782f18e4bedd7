"""Convert Slate editor documents to markdown syntax trees (MDAST)."""

import logging

from slatemark.converters import slate_to_mdast
from slatemark.registry import PluginRegistry, load_registry
from slatemark.utils.errors import (
    ConversionError,
    MissingRequiredChildError,
    PluginNotFoundError,
    SlatemarkError,
    UnmappedMarkTypeError,
    UnrecognizedNodeTypeError,
)

__version__ = "0.1.0"

# Library code never prints; applications opt in with LoggerFactory.configure_logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConversionError",
    "MissingRequiredChildError",
    "PluginNotFoundError",
    "PluginRegistry",
    "SlatemarkError",
    "UnmappedMarkTypeError",
    "UnrecognizedNodeTypeError",
    "load_registry",
    "slate_to_mdast",
]
