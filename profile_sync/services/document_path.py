"""
Document path matching for Firestore triggers.
"""

from typing import Dict

from ..errors import DocumentPathError

DOCUMENTS_MARKER = "/documents/"


def match_document_path(template: str, path: str) -> Dict[str, str]:
    """
    Match a document path against a template like ``users/{uid}``.

    Full resource names
    (``projects/p/databases/(default)/documents/users/u1``) are reduced to
    the part after ``/documents/`` first.

    Returns:
        Mapping of wildcard name to path segment, e.g. ``{"uid": "u1"}``

    Raises:
        DocumentPathError: If the path doesn't have the template's shape
    """
    relative = path
    if DOCUMENTS_MARKER in relative:
        relative = relative.split(DOCUMENTS_MARKER, 1)[1]
    relative = relative.strip("/")

    template_parts = template.strip("/").split("/")
    path_parts = relative.split("/")
    if len(template_parts) != len(path_parts):
        raise DocumentPathError(path, template)

    params = {}
    for expected, actual in zip(template_parts, path_parts):
        if not actual:
            raise DocumentPathError(path, template)
        if expected.startswith("{") and expected.endswith("}"):
            params[expected[1:-1]] = actual
        elif expected != actual:
            raise DocumentPathError(path, template)
    return params


def profile_path_template(collection: str) -> str:
    return f"{collection}/{{uid}}"
