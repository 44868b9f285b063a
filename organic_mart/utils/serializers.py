"""
MongoDB document serialization utilities
"""
import re
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from bson import ObjectId


def utcnow() -> datetime:
    """Timezone-aware current UTC time used for every stored timestamp."""
    return datetime.now(timezone.utc)


def create_slug(name: str) -> str:
    """
    Build a URL slug from a product name

    Lowercases, turns each whitespace run into ``-`` and drops every
    character that is not a word character or ``-``.
    """
    slug = re.sub(r"\s+", "-", name.lower())
    return re.sub(r"[^\w-]+", "", slug, flags=re.ASCII)


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Convert a MongoDB document into an API dict

    Args:
        doc: MongoDB document dictionary

    Returns:
        Copy of the document with ``_id`` exposed as string ``id`` and any
        nested ObjectIds stringified, or None if input is None
    """
    if doc is None:
        return None

    serialized_doc = convert_object_ids(doc)
    if "_id" in serialized_doc:
        serialized_doc["id"] = serialized_doc.pop("_id")

    return serialized_doc


def serialize_docs(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Serialize a list of MongoDB documents

    Args:
        docs: List of MongoDB document dictionaries

    Returns:
        List of serialized documents
    """
    return [serialize_doc(doc) for doc in docs if doc is not None]


def convert_object_ids(doc: Any) -> Any:
    """
    Recursively convert ObjectId instances to strings in a document
    Useful for nested documents or complex structures

    Args:
        doc: Document that may contain ObjectIds at any level

    Returns:
        Document with all ObjectIds converted to strings
    """
    if isinstance(doc, dict):
        return {key: convert_object_ids(value) for key, value in doc.items()}
    elif isinstance(doc, list):
        return [convert_object_ids(item) for item in doc]
    elif isinstance(doc, ObjectId):
        return str(doc)
    else:
        return doc
