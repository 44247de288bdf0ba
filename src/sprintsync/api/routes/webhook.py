"""Tracker webhook endpoint."""

import logging

from fastapi import APIRouter, BackgroundTasks

from sprintsync.api.dependencies import DispatcherDep, NotifierDep
from sprintsync.api.models import (
    APIResponse,
    DispatchResponse,
    dispatch_result_to_response,
)
from sprintsync.dispatcher import WebhookEvent

logger = logging.getLogger("sprintsync.api")

router = APIRouter(tags=["webhook"])


@router.post("/jira-webhook", response_model=APIResponse[DispatchResponse])
def receive_webhook(
    event: WebhookEvent,
    dispatcher: DispatcherDep,
    notifier: NotifierDep,
    background_tasks: BackgroundTasks,
) -> APIResponse[DispatchResponse]:
    """Handle a tracker webhook delivery.

    Always acknowledged with 200. Processing failures are logged and reported
    in the response's error field only.
    """
    logger.info("Received webhook %s for %s", event.webhook_event, event.issue_key)
    try:
        result = dispatcher.dispatch(event)
    except Exception:
        logger.exception("Webhook %s for %s failed", event.webhook_event, event.issue_key)
        return APIResponse(data=None, error="Webhook processing failed")

    notification = result.to_notification()
    if notification is not None:
        # Delivered after the response is sent
        background_tasks.add_task(notifier.notify, notification)

    return APIResponse(data=dispatch_result_to_response(result))
