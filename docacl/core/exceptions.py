"""Shared exceptions module."""

from typing import Optional


class DocAclException(Exception):
    """Base exception for docacl services."""

    def __init__(self, message: Optional[str] = "Access control error"):
        """Create a new DocAclException instance.

        Args:
        ----
            message (str, optional): The error message. Has default message.

        """
        self.message = message
        super().__init__(self.message)
