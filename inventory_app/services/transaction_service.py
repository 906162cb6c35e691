from datetime import datetime

from flask import current_app

from inventory_app.errors import RESTRICTED_ACCOUNT_MESSAGE, BusinessRuleError, ForbiddenError, NotFoundError
from inventory_app.models.item import Item
from inventory_app.models.transaction import Transaction
from inventory_app.repositories.item_repo import ItemRepo
from inventory_app.repositories.transaction_repo import TransactionRepo
from inventory_app.repositories.user_repo import UserRepo
from inventory_app.services.notification_service import NotificationService


class TransactionService:
    """
    Borrow / return / cancel state machine.

    borrowed -> returned | cancelled, both terminal. Every operation checks
    its preconditions before touching any row and commits once at the end,
    so a rejected request leaves nothing behind.
    """

    @staticmethod
    def _restock(item: Item):
        item.quantity += 1
        if item.status == Item.STATUS_MAINTENANCE:
            item.status = Item.STATUS_AVAILABLE

    @staticmethod
    def list_transactions(principal, user_id: int | None = None, status: str | None = None):
        if not principal.is_admin:
            user_id = principal.id
        return TransactionRepo.list_filtered(user_id=user_id, status=status)

    @staticmethod
    def borrow(principal, item_id: int, borrow_date: datetime, due_date: datetime) -> Transaction:
        user = UserRepo.get_by_id(principal.id)
        if user is None or user.is_restricted:
            raise ForbiddenError(RESTRICTED_ACCOUNT_MESSAGE)

        item = ItemRepo.get_for_update(item_id)
        if not item:
            raise NotFoundError("Item not found")

        if item.status != Item.STATUS_AVAILABLE:
            raise BusinessRuleError("Item is not available for borrowing")

        if item.quantity is None or item.quantity < 1:
            raise BusinessRuleError("Item is out of stock")

        transaction = TransactionRepo.add(Transaction(
            user_id=user.id,
            item_id=item.id,
            borrow_date=borrow_date,
            due_date=due_date,
            status=Transaction.STATUS_BORROWED
        ))

        item.quantity -= 1
        if item.quantity == 0:
            item.status = Item.STATUS_MAINTENANCE

        sent = NotificationService.notify(
            user.id,
            f"You have borrowed {item.name}. Please return it by {due_date.strftime('%b %d, %Y')}"
        )

        TransactionRepo.commit()
        NotificationService.mail_out([sent])
        current_app.logger.info(
            f"[borrow] transaction={transaction.id} user={user.id} item={item.id} "
            f"quantity_left={item.quantity} status={item.status}"
        )
        return transaction

    @staticmethod
    def return_item(principal, transaction_id: int) -> Transaction:
        transaction = TransactionRepo.get_for_update(transaction_id)
        if not transaction:
            raise NotFoundError("Transaction not found")

        if transaction.user_id != principal.id and not principal.is_admin:
            raise ForbiddenError("Unauthorized")

        if transaction.status != Transaction.STATUS_BORROWED:
            raise BusinessRuleError("Item is already returned or transaction is cancelled")

        now = datetime.utcnow()
        transaction.status = Transaction.STATUS_RETURNED
        # a loan booked ahead of time can be handed back before its borrow_date
        transaction.return_date = max(now, transaction.borrow_date)

        sent = []
        item = ItemRepo.get_for_update(transaction.item_id)
        if item:
            TransactionService._restock(item)

        # flush so the count below no longer sees this loan as borrowed
        TransactionRepo.flush()
        if TransactionRepo.count_overdue(transaction.user_id, now) == 0:
            owner = UserRepo.get_by_id(transaction.user_id)
            if owner and owner.is_restricted:
                owner.is_restricted = False
                sent.append(NotificationService.notify(
                    owner.id,
                    "Your account restriction has been lifted. Thank you for returning all overdue items."
                ))
                current_app.logger.info(f"[return] restriction lifted user={owner.id}")

        if item:
            sent.append(NotificationService.notify(transaction.user_id, f"You have returned {item.name}. Thank you!"))

        TransactionRepo.commit()
        NotificationService.mail_out(sent)
        current_app.logger.info(
            f"[return] transaction={transaction.id} user={transaction.user_id} by={principal.id}"
        )
        return transaction

    @staticmethod
    def cancel(principal, transaction_id: int) -> Transaction:
        transaction = TransactionRepo.get_for_update(transaction_id)
        if not transaction:
            raise NotFoundError("Transaction not found")

        if transaction.status != Transaction.STATUS_BORROWED:
            raise BusinessRuleError("Transaction is already returned or cancelled")

        transaction.status = Transaction.STATUS_CANCELLED

        sent = []
        # the owner's restriction flag is left as is
        item = ItemRepo.get_for_update(transaction.item_id)
        if item:
            TransactionService._restock(item)
            sent.append(NotificationService.notify(
                transaction.user_id,
                f"Your transaction for {item.name} has been cancelled by an administrator."
            ))

        TransactionRepo.commit()
        NotificationService.mail_out(sent)
        current_app.logger.info(f"[cancel] transaction={transaction.id} by admin={principal.id}")
        return transaction
