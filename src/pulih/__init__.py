"""
PULIH - Panic Journal Backend

This package provides the backend services for the Pulih Alami
self-help application: a personal journal of panic episodes,
monthly trend analytics, and account administration.

PRIVACY: Journal entries are personal health notes. Every storage
access is scoped to the authenticated owner.
"""

__version__ = "0.1.0"
__author__ = "Pulih Alami Team"
