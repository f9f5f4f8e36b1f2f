"""Order status updates: admin command and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from bakery.domain import bakery
from bakery.errors import InvalidInput, NotFound
from bakery.ordering.order import ORDER_STATUSES, Order

logger = structlog.get_logger(__name__)


@bakery.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)


@bakery.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        if command.status not in ORDER_STATUSES:
            raise InvalidInput("Invalid order status", details={"allowed": ORDER_STATUSES})

        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFound("Order not found") from None

        previous = order.status
        order.update_status(command.status)
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
        )
        return order.to_dict()
