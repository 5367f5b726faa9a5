"""Storage layer.

This package persists submissions to the append-only analytics sheet,
and reads them back as validated records.
"""
