"""
List Orders use case.
"""

from comptable.domain.entities.order import Order
from comptable.domain.repositories.i_order_repository import IOrderRepository


class ListOrders:
    """List a user's orders, oldest upload first."""

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, login: str) -> list[Order]:
        return await self.order_repository.list_by_owner(login)
