"""Validation services: checkers, external lookups, report aggregation."""
