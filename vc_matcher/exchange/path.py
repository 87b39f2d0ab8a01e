"""Resolve claim paths against parsed credential documents."""

import logging
from functools import lru_cache
from typing import Any, List, Optional

from jsonpath_ng import parse
from jsonpath_ng.exceptions import JSONPathError

LOGGER = logging.getLogger(__name__)

ROOT_PREFIX = "$."
PARSED_PATH_CACHE_SIZE = 1024


def strip_root(path: str) -> str:
    """Remove a leading `$.` root selector from a path."""
    return path[len(ROOT_PREFIX) :] if path.startswith(ROOT_PREFIX) else path


@lru_cache(maxsize=PARSED_PATH_CACHE_SIZE)
def compile_path(path: str):
    """Parse a JSONPath expression, reusing earlier parses of the same text."""
    return parse(path)


def find_all(document: Any, path: str) -> Optional[List[Any]]:
    """
    Return the values of every node matched by a JSONPath expression.

    Args:
        document: parsed claim document
        path: JSONPath expression, with or without the `$.` root selector

    Returns:
        The matched values in document order, or None when the expression
        cannot be parsed

    """
    try:
        jsonpath = compile_path(path)
    except JSONPathError as err:
        LOGGER.debug("Unable to parse path %s: %s", path, err)
        return None
    try:
        return [match.value for match in jsonpath.find(document)]
    except (KeyError, IndexError, TypeError, AttributeError):
        return []


def resolve_path(document: Any, path: str) -> Any:
    """
    Resolve a single path against a claim document.

    An exact top-level key takes precedence over JSONPath evaluation, so
    claims such as `@context` or dotted names still resolve.

    Args:
        document: parsed claim document (object or array), or None
        path: dotted or indexed path such as `credentialSubject.degree.type`

    Returns:
        The node at the path, or None when it is absent

    """
    if not isinstance(document, (dict, list)) or not path:
        return None
    if isinstance(document, dict) and path in document:
        return document[path]

    matches = find_all(document, path)
    if not matches:
        return None
    return matches[0]
