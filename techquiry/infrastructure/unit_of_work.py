# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from techquiry.shared.logging import logger


@contextmanager
def unit_of_work_scope(session_factory: Callable[[], Session]) -> Iterator[Session]:
    """One transaction: commit when the block succeeds, roll back when it raises.

    The session is closed in both cases, so records handed out of the block
    must not rely on lazy loading.
    """

    session = session_factory()
    try:
        yield session
        session.commit()
    except BaseException as exc:
        logger.debug(f"uow: rolling back after {type(exc).__name__}")
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["unit_of_work_scope"]
