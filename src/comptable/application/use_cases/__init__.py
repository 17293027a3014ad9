"""Application use cases."""

from comptable.application.use_cases.apply_accrual_outcome import (
    ApplyAccrualOutcome,
)
from comptable.application.use_cases.authenticate_user import AuthenticateUser
from comptable.application.use_cases.get_balance import GetBalance
from comptable.application.use_cases.list_orders import ListOrders
from comptable.application.use_cases.list_withdrawals import ListWithdrawals
from comptable.application.use_cases.reconcile_accruals import (
    LedgerRepositories,
    ReconcileAccruals,
    ReconciliationReport,
)
from comptable.application.use_cases.register_user import RegisterUser
from comptable.application.use_cases.submit_order import (
    SubmitOrder,
    SubmitOrderResult,
)
from comptable.application.use_cases.withdraw_points import WithdrawPoints

__all__ = [
    "ApplyAccrualOutcome",
    "AuthenticateUser",
    "GetBalance",
    "LedgerRepositories",
    "ListOrders",
    "ListWithdrawals",
    "ReconcileAccruals",
    "ReconciliationReport",
    "RegisterUser",
    "SubmitOrder",
    "SubmitOrderResult",
    "WithdrawPoints",
]
