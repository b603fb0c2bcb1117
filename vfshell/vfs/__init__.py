"""
vfshell virtual filesystem - an in-memory tree built from a CSV or nested
JSON/YAML description, with cd/ls/pwd/touch navigation.
"""

from .builder import build_from_csv, build_from_document, build_from_records, load_tree
from .codec import decode_content
from .navigator import VirtualFS
from .tree import Node, Tree

__all__ = [
    'VirtualFS',
    'Node',
    'Tree',
    'load_tree',
    'build_from_csv',
    'build_from_records',
    'build_from_document',
    'decode_content',
]
