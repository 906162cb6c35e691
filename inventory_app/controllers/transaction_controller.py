from flask import Blueprint, request

from inventory_app.errors import ServiceError
from inventory_app.models.transaction import Transaction
from inventory_app.schemas import BorrowRequest, parse
from inventory_app.services.transaction_service import TransactionService
from inventory_app.utils.decorators import role_required
from inventory_app.utils.responses import ok, service_error, internal_error
from inventory_app.utils.serializers import transaction_dict

transaction_bp = Blueprint("transactions", __name__)


def _list_transactions(principal):
    try:
        user_id = request.args.get("user_id", type=int)
        status = request.args.get("status") or None
        if status and status not in Transaction.STATUSES:
            status = None
        rows = TransactionService.list_transactions(principal, user_id=user_id, status=status)
        return ok([transaction_dict(t) for t in rows])
    except Exception as e:
        return internal_error("fetch transactions", e)


@transaction_bp.get("/user/transactions")
@role_required()
def list_transactions(principal):
    return _list_transactions(principal)


@transaction_bp.get("/admin/transactions")
@role_required("admin")
def admin_list_transactions(principal):
    return _list_transactions(principal)


@transaction_bp.post("/user/transactions/borrow")
@role_required()
def borrow(principal):
    try:
        body = parse(BorrowRequest, request.get_json(silent=True))
        t = TransactionService.borrow(principal, body.item_id, body.borrow_date, body.due_date)
        return ok(transaction_dict(t), "Item borrowed successfully", 201)
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("borrow item", e)


@transaction_bp.put("/user/transactions/<int:transaction_id>/return")
@role_required()
def return_item(principal, transaction_id: int):
    try:
        t = TransactionService.return_item(principal, transaction_id)
        return ok(transaction_dict(t), "Item returned successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("return item", e)


@transaction_bp.put("/admin/transactions/<int:transaction_id>/cancel")
@role_required("admin")
def cancel(principal, transaction_id: int):
    try:
        t = TransactionService.cancel(principal, transaction_id)
        return ok(transaction_dict(t), "Transaction cancelled successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("cancel transaction", e)
