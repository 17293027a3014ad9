"""
Unit tests for SubmitOrder use case.

Usage:
    pytest tests/unit/application/test_submit_order.py
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from comptable.application.use_cases.submit_order import SubmitOrder
from comptable.domain.entities.order import Order, OrderStatus, SubmissionResult
from comptable.domain.exceptions import (
    InvalidOrderNumberError,
    OrderOwnedByOtherUserError,
    ValidationError,
)

VALID_NUMBER = "79927398713"


class TestSubmitOrder:
    """Unit tests for SubmitOrder use case."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _use_case(self, order_repo: AsyncMock) -> SubmitOrder:
        return SubmitOrder(order_repository=order_repo)

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_new_number_accepted(self):
        """Test that a fresh number is stored as NEW for the uploader."""
        order_repo = AsyncMock()
        order_repo.insert_if_absent.return_value = True
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        result = await self._use_case(order_repo).execute(
            login="alice", raw_number=VALID_NUMBER, now=now
        )

        assert result.result == SubmissionResult.ACCEPTED
        assert result.order_number == VALID_NUMBER

        stored = order_repo.insert_if_absent.call_args.args[0]
        assert stored.number == VALID_NUMBER
        assert stored.owner == "alice"
        assert stored.status == OrderStatus.NEW
        assert stored.uploaded_at == now
        order_repo.get_by_number.assert_not_called()

    async def test_own_number_already_uploaded(self):
        order_repo = AsyncMock()
        order_repo.insert_if_absent.return_value = False
        order_repo.get_by_number.return_value = Order(
            number=VALID_NUMBER, owner="alice"
        )

        result = await self._use_case(order_repo).execute("alice", VALID_NUMBER)

        assert result.result == SubmissionResult.ALREADY_UPLOADED

    async def test_number_of_other_user_rejected(self):
        order_repo = AsyncMock()
        order_repo.insert_if_absent.return_value = False
        order_repo.get_by_number.return_value = Order(
            number=VALID_NUMBER, owner="bob"
        )

        with pytest.raises(OrderOwnedByOtherUserError) as exc_info:
            await self._use_case(order_repo).execute("alice", VALID_NUMBER)

        assert exc_info.value.code == "ORDER_OWNED_BY_OTHER_USER"

    async def test_luhn_failure(self):
        order_repo = AsyncMock()

        with pytest.raises(InvalidOrderNumberError):
            await self._use_case(order_repo).execute("alice", "79927398710")

        order_repo.insert_if_absent.assert_not_called()

    async def test_single_digit_is_invalid_number(self):
        order_repo = AsyncMock()

        with pytest.raises(InvalidOrderNumberError):
            await self._use_case(order_repo).execute("alice", "0")

    @pytest.mark.parametrize("raw", ["", "abc", "12 34", "-18", "1.8"])
    async def test_malformed_number(self, raw):
        """Test that non-digit input is a validation error, not a Luhn one."""
        order_repo = AsyncMock()

        with pytest.raises(ValidationError):
            await self._use_case(order_repo).execute("alice", raw)

        order_repo.insert_if_absent.assert_not_called()
