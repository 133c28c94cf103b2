"""Turns raw storage payloads into a parsed element tree."""

from confluence_md.preprocess.entities import normalize_entities
from confluence_md.preprocess.namespaces import wrap_with_namespaces
from confluence_md.preprocess.parser import parse_storage

__all__ = ["normalize_entities", "parse_storage", "wrap_with_namespaces"]
