"""
Pipeline Demo — In-Memory User Store
=====================================

What:  The mock data behind /api/users and the FastAPI dependency that reaches it.
Why:   Keeps the shared user list in one explicit object instead of a module
       global, so each app instance (and each test) gets its own data.
How:   create_app() builds a UserStore (or accepts one) and parks it on
       `app.state.user_store`; routes receive it through get_user_store().
When:  One store per application instance, living as long as the process.

Lifecycle of the data:
    - Seeded with two fixed records on construction
    - Appended to only by add(); records are never updated or deleted
    - Lost when the process exits (no persistence)

Concurrency:
    The service runs on a single event loop and add() never awaits, so the
    list is not locked.
"""

import time
from typing import Iterable, List, Optional

from fastapi import Request

from pipeline_demo.schemas.user import User


# ── Seed Data ─────────────────────────────────────────────────────────────
SEED_USERS = (
    {"id": 1, "name": "John Doe", "email": "john@example.com"},
    {"id": 2, "name": "Jane Smith", "email": "jane@example.com"},
)


class UserStore:
    """
    Append-only, process-lifetime list of users.

    Attributes:
        persist_created: When False (the default), add() accepts the user but
            the listed data stays at its seed records. When True, created users
            are appended and returned by later list() calls.
    """

    def __init__(
        self,
        seed: Optional[Iterable[dict]] = None,
        persist_created: bool = False,
    ):
        records = SEED_USERS if seed is None else seed
        self._users: List[User] = [User.model_validate(r) for r in records]
        self.persist_created = persist_created
        self._last_id = max((u.id for u in self._users), default=0)

    def list(self) -> List[User]:
        """Return a copy of all users in insertion order."""
        return list(self._users)

    def add(self, user: User) -> User:
        if self.persist_created:
            self._users.append(user)
        return user

    def next_id(self) -> int:
        """
        Generate an id from the current time in milliseconds.

        Ids are strictly increasing per store: two creations within the same
        millisecond (or after a clock step backwards) get previous + 1.
        """
        candidate = time.time_ns() // 1_000_000
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def __len__(self) -> int:
        return len(self._users)


# ── Store Dependency ──────────────────────────────────────────────────────
def get_user_store(request: Request) -> UserStore:
    """
    FastAPI dependency that provides the application's user store.

    Example usage in a route:
        @router.get("/users")
        async def list_users(store: UserStore = Depends(get_user_store)):
            return store.list()
    """
    return request.app.state.user_store
