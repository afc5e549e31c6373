"""Readers for documents and replay scripts used by the command line."""

from .document_reader import read_document, read_text
from .script_reader import load_script, parse_actions

__all__ = ["load_script", "parse_actions", "read_document", "read_text"]
