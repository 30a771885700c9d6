"""docacl: document-level access control filters for search."""

__version__ = "0.1.0"
