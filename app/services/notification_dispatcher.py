"""Fan-out of one notification to every active device of a user."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List

from app.exceptions import NotFoundException
from app.schemas.device import DeliveryOutcome, DispatchSummary
from app.services import audit
from app.services.device_store import DeviceStore
from app.services.push_sender import PushSender
from app.utils.validation import require_params

logger = logging.getLogger("app.push.dispatcher")

DEFAULT_TITLE = "Custom notification"


class NotificationDispatcher:
    """Deliver a message to all active tokens of a user.

    Each token is attempted once and independently. Delivery failures are
    recorded in the summary and never fail the batch; store failures before
    the fan-out do.

    With max_concurrency > 1 deliveries run on a bounded thread pool; the
    outcome list keeps the order of the store scan either way.
    """

    def __init__(
        self,
        store: DeviceStore,
        sender: PushSender,
        title: str = DEFAULT_TITLE,
        max_concurrency: int = 1,
    ):
        self.store = store
        self.sender = sender
        self.title = title
        self.max_concurrency = max(1, max_concurrency)

    def dispatch(self, user: str, message: str) -> DispatchSummary:
        require_params("sendnotifications", user=user, message=message)

        tokens = [device.token for device in self.store.scan(user=user, active=True)]
        if not tokens:
            raise NotFoundException(f"No active tokens found for user '{user}'.")

        outcomes = self._deliver_all(tokens, message)
        succeeded = sum(1 for outcome in outcomes if outcome.success)

        logger.info(
            f"Dispatch for user {user}: {succeeded} success, "
            f"{len(tokens) - succeeded} failures"
        )
        audit.log_dispatch(user, len(tokens), succeeded)
        return DispatchSummary(
            attempted=len(tokens),
            succeeded=succeeded,
            failed=len(tokens) - succeeded,
            message=f"Attempted to send notifications to {len(tokens)} token(s), {succeeded} succeeded.",
            details=outcomes,
        )

    def _deliver_all(self, tokens: List[str], message: str) -> List[DeliveryOutcome]:
        if self.max_concurrency == 1 or len(tokens) == 1:
            return [self._deliver(token, message) for token in tokens]
        workers = min(self.max_concurrency, len(tokens))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="push") as pool:
            return list(pool.map(lambda token: self._deliver(token, message), tokens))

    def _deliver(self, token: str, message: str) -> DeliveryOutcome:
        try:
            message_id = self.sender.send(token, self.title, message)
        except Exception as e:
            # Any sender failure stays local to this token
            error = getattr(e, "message", None) or str(e) or e.__class__.__name__
            logger.warning(f"Failed to send to token '{token}': {error}")
            return DeliveryOutcome(token=token, success=False, error=error)
        return DeliveryOutcome(token=token, success=True, message_id=str(message_id))
