"""PULIH application services."""
