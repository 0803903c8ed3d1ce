"""Read-only access to user profile and health data."""
from sqlalchemy.orm import Session, joinedload

from nutrichat_app.database.models import User


def get_personal_information(db: Session, user_id: int):
    """User with profile and health loaded, or None."""
    return (
        db.query(User)
        .options(joinedload(User.profile), joinedload(User.health))
        .filter(User.id == user_id)
        .first()
    )
