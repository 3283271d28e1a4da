"""Spreadsheet / CSV bulk import for the personal tracker API.

Decodes an uploaded file, normalizes each row against a declarative resource
schema (header aliases, type coercion, enum synonyms with fallback defaults)
and creates the records one by one through a resource store.
"""

__version__ = "0.1.0"
