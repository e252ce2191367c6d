"""API client for the time entries service."""

from .client import TimeEntriesClient

__all__ = ['TimeEntriesClient']
