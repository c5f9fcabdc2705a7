import attrs


@attrs.define(frozen=True)
class UserAccount:
    """Auth provider view of the signed-in user"""

    id: str
    email: str
    display_name: str = ''
    is_admin: bool = False
