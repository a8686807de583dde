"""Governance membership validator."""
