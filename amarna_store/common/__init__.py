"""Shared models, storage and service helpers."""
