"""
CodeMerger: collect uploaded files and zip bundles into one ordered list,
view it flat or as folders, and render a merged document and an ASCII tree.
"""

from .ingest import IngestError, UploadBlob, ingest_blobs
from .render import render_document, render_structure
from .store import FileRecord, FileStore, StoreError
from .tree import FileTree, TreeNode, all_leaf_indices, build_tree
from .workspace import BusyError, Workspace

__all__ = [
    "BusyError",
    "FileRecord",
    "FileStore",
    "FileTree",
    "IngestError",
    "StoreError",
    "TreeNode",
    "UploadBlob",
    "Workspace",
    "all_leaf_indices",
    "build_tree",
    "ingest_blobs",
    "render_document",
    "render_structure",
]
