"""Fixtures for Solr destination tests."""

from unittest.mock import MagicMock

import pytest

from docacl.platform.destinations.solr.filter_translator import FilterTranslator


@pytest.fixture
def translator():
    """FilterTranslator with a mock logger."""
    return FilterTranslator(logger=MagicMock())
