from pakli.models.user import User
from pakli.schemas.user import UserOut


def to_user_out(user: User) -> UserOut:
    """Identity plus profile; a missing profile row leaves the profile fields empty."""
    profile = user.profile
    if profile is None:
        return UserOut(id=user.id, email=user.email, name=user.name or "")
    return UserOut(
        id=user.id,
        email=user.email,
        name=user.name or "",
        address=profile.address or "",
        city=profile.city or "",
        district=profile.district or "",
        notifications=bool(profile.notifications),
        email_notifications=bool(profile.email_notifications),
    )


def current_subscription(user: User):
    """Latest subscription that is still running, if any."""
    running = [s for s in user.subscriptions if s.is_current()]
    if not running:
        return None
    return max(running, key=lambda s: s.expires_at)
