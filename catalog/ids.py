"""
Id generation for new aggregates.
"""

from __future__ import annotations

import uuid
from typing import Callable


def uuid_generator() -> str:
    return uuid.uuid4().hex


def generate_unique_id(repository, id_generator: Callable[[], str] = uuid_generator, attempts: int = 10) -> str:
    """Generate an id that is not yet used in repository.

    Args:
        repository: Repository supporting the `in` operator on ids
        id_generator: Callable producing candidate ids
        attempts: How many candidates to try before giving up

    Raises:
        RuntimeError: If every candidate was taken
    """
    for _ in range(attempts):
        candidate = id_generator()
        if candidate not in repository:
            return candidate

    raise RuntimeError(f"Could not generate a unique id after {attempts} attempts")
