"""Balanzia statement ingestion service."""
