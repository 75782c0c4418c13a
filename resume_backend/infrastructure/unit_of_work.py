# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""One transaction per repository call."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from resume_backend.shared.logging import logger


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Yield a fresh session; commit if the block succeeds, roll back if it raises.

    Errors are re-raised unchanged so repositories can translate them
    (e.g. ``IntegrityError`` on a duplicate email).
    """

    session = factory()
    try:
        yield session
        session.commit()
    except BaseException as exc:
        logger.debug(f"uow: rollback after {type(exc).__name__}")
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["unit_of_work_scope"]
