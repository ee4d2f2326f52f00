"""xmlquery -- tag lookup, XPath value extraction and map projection over XML.

Public API re-exports for convenient access.
"""

from xmlquery.api import XMLQuery, content, get, parse, to_map, xpath
from xmlquery.config import XMLQueryConfig
from xmlquery.engine import LxmlDocumentParser, LxmlPathEvaluator
from xmlquery.errors import (
    ErrorCode,
    InvalidPathExpressionError,
    InvalidTagNameError,
    MalformedDocumentError,
    QueryError,
    RepresentationError,
    UnsupportedNamespaceSelectionError,
    XMLQueryException,
)
from xmlquery.extractor import extract_values, extract_values_or_none
from xmlquery.models import (
    Document,
    Element,
    Namespace,
    Node,
    NodeKind,
    ParseDiagnostic,
    Text,
    TextType,
)
from xmlquery.projector import MapProjector
from xmlquery.protocols import DocumentParser, PathEvaluator
from xmlquery.query import QueryEvaluator
from xmlquery.tags import Representation, Symbol, convert, normalize

__all__ = [
    # Operations
    "parse",
    "get",
    "xpath",
    "to_map",
    "content",
    "XMLQuery",
    # Configuration
    "XMLQueryConfig",
    # Errors
    "ErrorCode",
    "QueryError",
    "XMLQueryException",
    "MalformedDocumentError",
    "InvalidTagNameError",
    "InvalidPathExpressionError",
    "UnsupportedNamespaceSelectionError",
    "RepresentationError",
    # Models
    "Document",
    "Element",
    "Text",
    "TextType",
    "Namespace",
    "Node",
    "NodeKind",
    "ParseDiagnostic",
    # Tags
    "Representation",
    "Symbol",
    "normalize",
    "convert",
    # Components
    "QueryEvaluator",
    "MapProjector",
    "extract_values",
    "extract_values_or_none",
    # Protocols and engine
    "DocumentParser",
    "PathEvaluator",
    "LxmlDocumentParser",
    "LxmlPathEvaluator",
]
