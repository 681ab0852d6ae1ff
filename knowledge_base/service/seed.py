"""
Default user seeding.

The seed list comes from configuration (see AppConfig.seed_users); users
whose email already exists are left untouched.
"""

import logging
from typing import Any, Dict, Iterable, List

from knowledge_base.core import User

from .users import UserRepository

logger = logging.getLogger(__name__)


def seed_default_users(users: UserRepository, seed_users: Iterable[Dict[str, Any]]) -> List[User]:
    """
    Create each seed user that does not exist yet.

    Args:
        users: Repository to seed
        seed_users: Dicts with name, email, password and role

    Returns:
        The users created by this call
    """
    created = []
    for user_data in seed_users:
        if users.find_by_email(user_data["email"]) is not None:
            continue
        user = users.create(user_data)
        created.append(user)
        logger.info(f"Created default {user.role.value} user")
    return created
