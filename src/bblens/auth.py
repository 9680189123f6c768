import base64

from .models import AuthenticatedUser, User


def authenticate(user: User) -> AuthenticatedUser:
    """Return ``user`` paired with the token for the ``Authorization: Basic`` header."""
    raw = f"{user.username}:{user.token}".encode("utf-8")
    return AuthenticatedUser(user=user, auth=base64.b64encode(raw).decode("ascii"))
