"""Authority domain fakes for testing."""

from docacl.domains.authority.fakes.client import FakeAuthorityClient

__all__ = ["FakeAuthorityClient"]
