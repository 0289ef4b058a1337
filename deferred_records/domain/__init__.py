"""
Domain package for Deferred Records.

Exports the record model served by the store and the query engine.
Keep this package focused on data definitions and validation concerns.
"""

from deferred_records.domain.models import Person

__all__ = [
    "Person",
]
