"""Factory Boy helpers building the project's plain dataclasses."""

from __future__ import annotations

import factory


class BaseFactory(factory.Factory):
    """Base class for factories of immutable dataclasses.

    Objects are built in memory only; tests hand them to a repository
    explicitly when they need them stored.
    """

    class Meta:
        abstract = True
