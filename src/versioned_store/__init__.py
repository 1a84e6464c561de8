"""
Versioned Store - schema versioning and table lifecycle for SQLite

Keeps a reserved bookkeeping table (TablesVersions) that records the
installed schema version of every managed table, and provides the
primitives data owners use to provision their own tables at startup.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
