"""Submission ingestion.

This package decodes submission envelopes, normalizes them into
fixed-shape records, and appends them to the analytics sheet.
"""
