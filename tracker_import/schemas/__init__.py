from .resources import RESOURCE_SCHEMAS, get_schema, resource_names

__all__ = [
    "RESOURCE_SCHEMAS",
    "get_schema",
    "resource_names",
]
