"""Aggregate analytics over stored submissions.

This package reduces decoded sheet rows into the summary returned by
the summary operation.
"""
