"""Field constraint checks run at the start of register/create/update.

Each function returns every violated constraint as a human-readable
message; an empty list means the input is acceptable.
"""

from typing import List, Optional

from app.utils.auth import BCRYPT_MAX_BYTES

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def validate_registration(username: str, password: str) -> List[str]:
    errors = []
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        errors.append(
            f"username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        errors.append("password too long: must be at most 72 bytes when UTF-8 encoded")
    return errors


def _title_errors(title: str) -> List[str]:
    if not title.strip():
        return ["title cannot be empty"]
    if len(title.strip()) > TITLE_MAX_LENGTH:
        return [f"title must be at most {TITLE_MAX_LENGTH} characters"]
    return []


def _description_errors(description: Optional[str]) -> List[str]:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        return [f"description must be at most {DESCRIPTION_MAX_LENGTH} characters"]
    return []


def validate_new_task(title: str, description: Optional[str]) -> List[str]:
    return _title_errors(title) + _description_errors(description)


def validate_task_changes(changes: dict) -> List[str]:
    """Check only the fields present in ``changes``.

    ``title`` and ``is_completed`` may be omitted but not set to null;
    ``description`` and ``due_date`` accept null (it clears them).
    """
    errors = []
    if "title" in changes:
        if changes["title"] is None:
            errors.append("title cannot be null")
        else:
            errors.extend(_title_errors(changes["title"]))
    if "description" in changes:
        errors.extend(_description_errors(changes["description"]))
    if "is_completed" in changes and changes["is_completed"] is None:
        errors.append("is_completed cannot be null")
    return errors
