# notifications/tasks.py
import logging

from celery import shared_task
from django.apps import apps

from .models import Notification
from .emails import (
    send_join_request_email,
    send_invite_email,
    send_request_resolved_email,
)

logger = logging.getLogger("togethr.notifications")


def _load_request(model_label: str, request_id: int):
    model = apps.get_model(model_label)
    try:
        return model.objects.select_related("sender", "receiver").get(id=request_id)
    except model.DoesNotExist:
        logger.warning(f"{model_label} #{request_id} vanished before notification")
        return None


def _notify_in_app(model_label: str, request_id: int, **fields):
    try:
        Notification.objects.create(**fields)
    except Exception:
        logger.exception(f"In-app notification failed for {model_label} #{request_id}")


@shared_task
def notify_join_request_task(model_label: str, request_id: int):
    """
    In-app notification + email to the unit owner for a new join request.
    """
    req = _load_request(model_label, request_id)
    if req is None:
        return

    unit = req.unit
    _notify_in_app(
        model_label,
        request_id,
        user=req.receiver,
        type=Notification.TYPE_JOIN_REQUEST,
        title=f"{req.sender.display_name} wants to join {unit.display_name}",
        body=req.message,
        link=unit.page_path,
    )

    # Delivery failures must never surface to the requester
    try:
        send_join_request_email(req)
    except Exception:
        logger.exception(f"Join request email failed for {model_label} #{request_id}")


@shared_task
def notify_invite_task(model_label: str, request_id: int):
    req = _load_request(model_label, request_id)
    if req is None:
        return

    unit = req.unit
    _notify_in_app(
        model_label,
        request_id,
        user=req.receiver,
        type=Notification.TYPE_INVITE,
        title=f"{req.sender.display_name} invited you to {unit.display_name}",
        body=req.message,
        link=unit.page_path,
    )

    try:
        send_invite_email(req)
    except Exception:
        logger.exception(f"Invite email failed for {model_label} #{request_id}")


@shared_task
def notify_request_resolved_task(model_label: str, request_id: int):
    """
    Tell the sender their request was accepted or rejected. For an invite
    the sender is the owner, who hears what the invitee decided.
    """
    req = _load_request(model_label, request_id)
    if req is None:
        return

    unit = req.unit
    accepted = req.status == req.STATUS_ACCEPTED
    if req.type == req.TYPE_INVITE:
        verb = "accepted" if accepted else "declined"
        notif_type = Notification.TYPE_INVITE_ACCEPTED if accepted else Notification.TYPE_INVITE_DECLINED
        title = f"{req.receiver.display_name} {verb} your invite to {unit.display_name}"
    else:
        notif_type = Notification.TYPE_REQUEST_ACCEPTED if accepted else Notification.TYPE_REQUEST_REJECTED
        title = f"Your request for {unit.display_name} was {'accepted' if accepted else 'rejected'}"

    _notify_in_app(
        model_label,
        request_id,
        user=req.sender,
        type=notif_type,
        title=title,
        link=unit.page_path,
    )

    try:
        send_request_resolved_email(req)
    except Exception:
        logger.exception(f"Resolution email failed for {model_label} #{request_id}")
