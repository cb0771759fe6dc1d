# alertbridge/services/credentials.py
from typing import Optional

from ..errors import ForbiddenError
from .options_store import Options


def verify_credentials(username: Optional[str], password: Optional[str], options: Options) -> bool:
    """
    Check the basic-auth pair sent with a notification against the stored options.

    Returns True when the pair matches, raises ForbiddenError otherwise.
    Checks run in order: missing username, missing password, mismatch.
    """
    if not username:
        raise ForbiddenError("No username provided")
    if not password:
        raise ForbiddenError("No password provided")
    if username != options.username or password != options.password:
        raise ForbiddenError("Username / password mismatch")

    return True
