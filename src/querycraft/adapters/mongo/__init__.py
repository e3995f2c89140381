"""MongoDB backend: query builder, document mapper and adapter."""

from .adapter import MongoAdapter
from .mapper import MongoDocumentMapper
from .query_builder import MongoQueryBuilder, to_bson

__all__ = [
    "MongoAdapter",
    "MongoDocumentMapper",
    "MongoQueryBuilder",
    "to_bson",
]
