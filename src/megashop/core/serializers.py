"""Plain-dict serializers for page props."""


def user_to_dict(user):
    return {
        "id": str(user.pk),
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "email_verified_at": user.email_verified_at.isoformat() if user.email_verified_at else None,
        "created_at": user.date_joined.isoformat() if user.date_joined else None,
    }
