"""MongoDB document serialization utilities."""

from datetime import datetime

from bson import ObjectId


def serialize_doc(doc):
    """Convert a MongoDB document (or list of them) to a JSON-safe value.

    ``_id`` keys are dropped; ObjectIds become strings and datetimes ISO strings.
    """
    if doc is None:
        return None
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, datetime):
        return doc.isoformat()
    if isinstance(doc, (list, tuple)):
        return [serialize_doc(d) for d in doc]
    if isinstance(doc, dict):
        return {key: serialize_doc(value) for key, value in doc.items() if key != "_id"}
    return doc
