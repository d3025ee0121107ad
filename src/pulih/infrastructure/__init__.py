"""
PULIH Infrastructure Layer

External integrations: database, storage, metrics and error tracking.
Storage components implement abstract interfaces for testability.
"""
