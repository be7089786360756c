"""Users app package.

Defines the custom user model. Every operator account belongs to exactly
one tenant and carries a role; use ``apps.users.models.CustomUser`` as the
AUTH_USER_MODEL throughout the project.
"""
