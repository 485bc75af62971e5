"""
Wardrobe Backend — User Service Unit Tests
===========================================

What:  UserService.login against a mocked AsyncSession.

What we test:
    ✅ An unknown username still pays for one bcrypt check
    ✅ The placeholder hash is built once per cost and reused
"""

from unittest.mock import MagicMock, patch

import pytest

from wardrobe.exceptions import AuthenticationError
from wardrobe.schemas.user import LoginRequest
from wardrobe.services.user_service import INVALID_CREDENTIALS, UserService


class TestLogin:

    def setup_method(self):
        self.service = UserService(bcrypt_rounds=4)
        self.tokens = MagicMock()

    @pytest.mark.asyncio
    async def test_unknown_user_runs_bcrypt(self, mock_db_session):
        mock_db_session.scalar.return_value = None

        with patch("wardrobe.services.user_service.verify_password", return_value=False) as verify:
            with pytest.raises(AuthenticationError) as exc_info:
                await self.service.login(
                    mock_db_session, LoginRequest(username="ghost", password="nope"), self.tokens,
                )

        assert exc_info.value.message == INVALID_CREDENTIALS
        verify.assert_called_once()
        password, placeholder = verify.call_args.args
        assert password == "nope"
        assert placeholder.startswith("$2b$04$")
        self.tokens.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_placeholder_hash_is_cached_per_cost(self, mock_db_session):
        mock_db_session.scalar.return_value = None
        body = LoginRequest(username="ghost", password="nope")

        with patch("wardrobe.services.user_service.hash_password", return_value="$2b$04$x") as hashed:
            for _ in range(2):
                with pytest.raises(AuthenticationError):
                    await self.service.login(mock_db_session, body, self.tokens)
            with pytest.raises(AuthenticationError):
                await self.service.login(mock_db_session, body, self.tokens, bcrypt_rounds=5)

        assert [c.args[1] for c in hashed.call_args_list] == [4, 5]
