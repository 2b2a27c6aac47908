"""
JSON representations of accounts models.
"""


def user_to_dict(user):
    return {
        'id': user.pk,
        'phone_number': user.phone_number,
        'priority': user.priority,
        'created_at': user.created_at,
        'updated_at': user.updated_at,
    }
