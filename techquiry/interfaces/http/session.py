# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Binds Flask's cookie session to a server side authentication slot."""

from __future__ import annotations

import secrets

from flask import g, session

from techquiry.infrastructure.session.slots import SessionAuthenticationSlot, SessionSlotRegistry

SESSION_ID_KEY = "sid"


def current_session_id() -> str:
    session_id = session.get(SESSION_ID_KEY)
    if not isinstance(session_id, str) or not session_id:
        session_id = secrets.token_urlsafe(32)
        session[SESSION_ID_KEY] = session_id
        session.permanent = True
    return session_id


def current_slot(registry: SessionSlotRegistry) -> SessionAuthenticationSlot:
    slot = registry.slot_for(current_session_id())
    authentication = slot.get_authentication()
    g.user_id = authentication.user_id if authentication else None
    return slot


def rotate_session_id(
    registry: SessionSlotRegistry, slot: SessionAuthenticationSlot
) -> SessionAuthenticationSlot:
    """Move the slot's authentication under a fresh session id.

    Called right after a successful login. The pre-login id and its slot are
    dropped from the registry.
    """

    previous_id = current_session_id()
    fresh_id = secrets.token_urlsafe(32)
    fresh = registry.slot_for(fresh_id)
    with slot.locked():
        fresh.set_authentication(slot.get_authentication())
        slot.set_authentication(None)
    registry.discard(previous_id)
    session[SESSION_ID_KEY] = fresh_id
    session.permanent = True
    return fresh
