from __future__ import annotations

# userdb/domain/validation.py
from ..errors import InvalidArgument

AGE_MIN = 0
AGE_MAX = 150
NAME_MAX_LEN = 100


def validate_user(name: str, age: int) -> None:
    """Check a user's fields before anything is written. Raises InvalidArgument."""
    if not isinstance(age, int) or isinstance(age, bool):
        raise InvalidArgument("age must be an integer")
    if age < AGE_MIN or age > AGE_MAX:
        raise InvalidArgument("age out of range")
    if not isinstance(name, str):
        raise InvalidArgument("name must be a string")
    if len(name) == 0 or len(name) > NAME_MAX_LEN:
        raise InvalidArgument("name length invalid")
