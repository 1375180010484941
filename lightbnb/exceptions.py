"""Failures raised by the data-access layer.

Lookups that find nothing return None or an empty list; these exceptions
mean the statement itself did not succeed.
"""


class StoreError(RuntimeError):
    """A query or insert failed in the relational store."""


class DuplicateEmailError(StoreError):
    """A user with this email already exists."""
