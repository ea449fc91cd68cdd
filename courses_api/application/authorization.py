from enum import Enum

from ..domain.entities import Course, User


class Decision(str, Enum):
    PERMIT = "permit"
    DENY = "deny"


def authorize(identity: User, course: Course) -> Decision:
    """Менять курс может только его владелец."""
    if identity.id is not None and course.owner_id == identity.id:
        return Decision.PERMIT
    return Decision.DENY
