"""Solr destination helpers."""

from docacl.platform.destinations.solr.filter_translator import FilterTranslator

__all__ = ["FilterTranslator"]
