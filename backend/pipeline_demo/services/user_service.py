"""
Pipeline Demo — User Service (Business Logic)
==============================================

What:  Validation and construction of users on top of an injected UserStore.
Why:   Keeps the "name and email are required" rule and id/timestamp generation
       out of the route handlers, so they can be tested without HTTP.
How:   Stateless methods that receive the store on every call.
Who:   Called by the /api/users route handlers.

Design Decision:
    UserService holds no state of its own. The store passed in owns the data
    and the id sequence, so two apps with two stores never share users.
"""

import logging
from typing import Any, List, Mapping

from pipeline_demo.exceptions import ValidationError
from pipeline_demo.schemas.user import User, utc_timestamp
from pipeline_demo.store import UserStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name and email are required"


class UserService:
    """
    Business logic layer for user operations.

    Responsibilities:
        - list_users(): Current users in insertion order
        - create_user(): Validate the payload and build a new User
    """

    def list_users(self, store: UserStore) -> List[User]:
        return store.list()

    def create_user(self, store: UserStore, payload: Mapping[str, Any]) -> User:
        """
        Validate a create-user payload and hand the new user to the store.

        Validation:
            `name` and `email` must both be present, non-empty strings.
            Anything else (missing key, None, "", a number) fails with the
            same fixed message and nothing is stored.

        Args:
            store: The application's user store
            payload: Decoded JSON request body (empty mapping if none)

        Returns:
            The constructed User, including id and createdAt

        Raises:
            ValidationError: name or email missing, falsy or not a string (→ 400)
        """
        name = payload.get("name")
        email = payload.get("email")

        missing = [
            field for field, value in (("name", name), ("email", email))
            if not value or not isinstance(value, str)
        ]
        if missing:
            logger.info("Rejected user creation, missing: %s", ", ".join(missing))
            raise ValidationError(
                message=REQUIRED_FIELDS_MESSAGE,
                context={"missing": missing},
            )

        user = User(
            id=store.next_id(),
            name=name,
            email=email,
            created_at=utc_timestamp(),
        )
        store.add(user)
        logger.info("User %d created (persisted=%s)", user.id, store.persist_created)
        return user


# Module-level instance used by the route handlers
user_service = UserService()
