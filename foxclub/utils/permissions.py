"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from foxclub.models.user import User, UserRole

ADMIN = UserRole.ADMIN

# 관리 권한을 갖는 역할 목록은 여기 한 곳에서만 정의한다.
ADMINISTRATOR_ROLES = (ADMIN,)


def can_administer(role) -> bool:
    if role is None:
        return False
    try:
        return UserRole(role) in ADMINISTRATOR_ROLES
    except ValueError:
        return False


def is_admin(user: User) -> bool:
    return can_administer(user.role)


def is_approved(user: User) -> bool:
    return bool(user.approved)


def can_view_profile(viewer: User, profile_user_id: int) -> bool:
    if is_admin(viewer):
        return True
    return int(viewer.user_id) == int(profile_user_id)


def can_access_form(user: User) -> bool:
    return is_approved(user)
