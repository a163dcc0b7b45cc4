"""Tests for access_policy."""

import pytest

from chatrelay.config import AccessConfig
from chatrelay.domain.exceptions import AuthorizationDenied
from chatrelay.domain.services import ensure_allowed, is_allowed


class TestIsAllowed:
    """is_allowed tests."""

    def test_no_lists_allows_everyone(self) -> None:
        """Test that an unrestricted bot admits any sender."""
        assert is_allowed(1, 2, AccessConfig())

    def test_admin_always_allowed(self) -> None:
        """Test that admins bypass the allow-lists."""
        access = AccessConfig(admin_user_ids=[7], allowed_user_ids=[1])

        assert is_allowed(7, 999, access)

    def test_listed_user_allowed(self) -> None:
        """Test that a listed user is admitted in any chat."""
        access = AccessConfig(allowed_user_ids=[1])

        assert is_allowed(1, 555, access)

    def test_listed_chat_allowed(self) -> None:
        """Test that anyone in a listed chat is admitted."""
        access = AccessConfig(allowed_chat_ids=[-100])

        assert is_allowed(42, -100, access)

    @pytest.mark.parametrize(
        "access",
        [
            AccessConfig(allowed_user_ids=[1]),
            AccessConfig(allowed_chat_ids=[-100]),
            AccessConfig(admin_user_ids=[7], allowed_user_ids=[1]),
        ],
    )
    def test_unlisted_sender_denied(self, access: AccessConfig) -> None:
        """Test that an unlisted sender is rejected once any list is set."""
        assert not is_allowed(2, 3, access)

    def test_admin_list_alone_does_not_restrict(self) -> None:
        """Test that only allow-lists turn on restriction."""
        assert is_allowed(2, 3, AccessConfig(admin_user_ids=[7]))


class TestEnsureAllowed:
    """ensure_allowed tests."""

    def test_raises_with_ids(self) -> None:
        """Test that the exception carries the sender and chat."""
        with pytest.raises(AuthorizationDenied) as exc_info:
            ensure_allowed(2, 3, AccessConfig(allowed_user_ids=[1]))

        assert exc_info.value.user_id == 2
        assert exc_info.value.chat_id == 3

    def test_passes_when_allowed(self) -> None:
        """Test that no exception is raised for an allowed sender."""
        ensure_allowed(1, 3, AccessConfig(allowed_user_ids=[1]))
