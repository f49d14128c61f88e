# togethr-backend/core/lifecycle.py
"""
Request lifecycle and unit status transitions for hack teams and projects.

Unit:     OPEN -> COMPLETED | CANCELLED (owner only, exactly once)
Request:  PENDING -> ACCEPTED | REJECTED (receiver) | CANCELLED (sender)

Every function takes the concrete model class plus ids, and the acting user
explicitly. Errors are raised as DRF exceptions and rendered by
core.exceptions.custom_exception_handler.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from gamification.engine import TrustEngine
from notifications.tasks import (
    notify_invite_task,
    notify_join_request_task,
    notify_request_resolved_task,
)
from .exceptions import Conflict, InvalidOperation

logger = logging.getLogger("togethr.lifecycle")


def _get_unit(unit_model, unit_id):
    try:
        return unit_model.objects.select_related("owner").get(pk=unit_id)
    except unit_model.DoesNotExist:
        raise NotFound(f"{unit_model.LABEL.capitalize()} not found")


def _after_commit(task, req):
    """Queue a notification task once the current transaction is durable."""
    label, pk = req._meta.label, req.pk

    def dispatch():
        # The request row is already committed; a broker outage must not fail the call
        try:
            task.delay(label, pk)
        except Exception:
            logger.exception(f"Could not queue {task.name} for {label} #{pk}")

    transaction.on_commit(dispatch)


def submit_join_request(unit_model, unit_id, sender, message, github_url, linkedin_url):
    """
    Create a PENDING JOIN request from `sender` to the unit owner.
    """
    message = (message or "").strip()
    github_url = (github_url or "").strip()
    linkedin_url = (linkedin_url or "").strip()
    if not (message and github_url and linkedin_url):
        raise ValidationError("All fields are required")

    unit = _get_unit(unit_model, unit_id)
    label = unit.LABEL

    if unit.owner_id == sender.pk:
        raise InvalidOperation(f"You cannot join your own {label}")

    if unit.members.filter(user=sender).exists():
        raise Conflict(f"You are already a member of this {label}")

    pending = unit.requests.filter(
        sender=sender,
        type=unit.requests.model.TYPE_JOIN,
        status=unit.requests.model.STATUS_PENDING,
    )
    if pending.exists():
        raise Conflict("Join request already sent")

    # The partial unique constraint closes the race between check and insert
    try:
        with transaction.atomic():
            req = unit.requests.create(
                type=unit.requests.model.TYPE_JOIN,
                sender=sender,
                receiver=unit.owner,
                message=message,
                github_url=github_url,
                linkedin_url=linkedin_url,
            )
    except IntegrityError:
        raise Conflict("Join request already sent")

    logger.info(f"Join request created: {label}={unit.pk}, request={req.pk}, sender={sender.pk}")
    _after_commit(notify_join_request_task, req)
    return req


def send_invite(unit_model, unit_id, owner, invitee_id, message=""):
    """
    Owner invites another user: a PENDING INVITE with the invitee as receiver.
    """
    unit = _get_unit(unit_model, unit_id)
    label = unit.LABEL

    if unit.owner_id != owner.pk:
        raise PermissionDenied(f"Only the {unit.OWNER_TITLE} can invite people to this {label}")

    try:
        invitee_id = int(invitee_id)
    except (TypeError, ValueError):
        raise ValidationError({"userId": ["A valid user id is required."]})

    User = get_user_model()
    try:
        invitee = User.objects.get(pk=invitee_id, is_active=True)
    except User.DoesNotExist:
        raise NotFound("User not found")

    if invitee.pk == owner.pk:
        raise InvalidOperation("You cannot invite yourself")

    if unit.is_closed:
        raise InvalidOperation(f"This {label} is already closed")

    if unit.members.filter(user=invitee).exists():
        raise Conflict(f"User is already a member of this {label}")

    request_model = unit.requests.model
    pending = unit.requests.filter(
        sender=owner,
        receiver=invitee,
        type=request_model.TYPE_INVITE,
        status=request_model.STATUS_PENDING,
    )
    if pending.exists():
        raise Conflict("Invite already sent")

    try:
        with transaction.atomic():
            req = unit.requests.create(
                type=request_model.TYPE_INVITE,
                sender=owner,
                receiver=invitee,
                message=(message or "").strip(),
            )
    except IntegrityError:
        raise Conflict("Invite already sent")

    logger.info(f"Invite created: {label}={unit.pk}, request={req.pk}, invitee={invitee.pk}")
    _after_commit(notify_invite_task, req)
    return req


def resolve_request(request_model, request_id, actor, new_status):
    """
    Move a PENDING request to ACCEPTED, REJECTED or CANCELLED.

    Accepting adds the joining user as a member, rewards them and updates the
    unit's counters, all in one transaction.
    """
    terminal = (
        request_model.STATUS_ACCEPTED,
        request_model.STATUS_REJECTED,
        request_model.STATUS_CANCELLED,
    )
    if new_status not in terminal:
        raise ValidationError({"status": [f"Status must be one of {', '.join(terminal)}."]})

    try:
        req = request_model.objects.select_related("sender", "receiver").get(pk=request_id)
    except request_model.DoesNotExist:
        raise NotFound("Request not found")

    if new_status == request_model.STATUS_CANCELLED:
        if req.sender_id != actor.pk:
            raise PermissionDenied("Only the sender can withdraw this request")
    elif req.receiver_id != actor.pk:
        raise PermissionDenied("You are not allowed to respond to this request")

    if req.status != request_model.STATUS_PENDING:
        logger.warning(
            f"Request already resolved: request={req.pk}, status={req.status}, "
            f"to={new_status}, actor={actor.pk}"
        )
        raise InvalidOperation("Request has already been processed")

    unit = req.unit
    label = unit.LABEL

    with transaction.atomic():
        if new_status == request_model.STATUS_ACCEPTED:
            unit = type(unit).objects.select_for_update().get(pk=unit.pk)
            joining_user = req.joining_user

            if unit.is_closed:
                raise InvalidOperation(f"This {label} is already closed")
            if not unit.has_open_slot():
                raise InvalidOperation(unit.NO_SLOT_MESSAGE)
            if unit.members.filter(user=joining_user).exists():
                raise Conflict(f"User is already a member of this {label}")

        updated = request_model.objects.filter(
            pk=req.pk, status=request_model.STATUS_PENDING
        ).update(status=new_status, updated_at=timezone.now())
        if updated != 1:
            raise InvalidOperation("Request has already been processed")

        if new_status == request_model.STATUS_ACCEPTED:
            try:
                with transaction.atomic():
                    unit.members.create(
                        user=joining_user,
                        role=unit.MEMBER_ROLE,
                        name=joining_user.display_name,
                    )
            except IntegrityError:
                raise Conflict(f"User is already a member of this {label}")

            TrustEngine.award(
                [joining_user.pk],
                unit.ACCEPT_REWARD,
                TrustEngine.reason_for(unit, "joined"),
                unit,
            )
            unit.on_member_added()

    logger.info(
        f"Request resolved: {label}={unit.pk}, request={req.pk}, "
        f"to={new_status}, actor={actor.pk}"
    )

    if new_status != request_model.STATUS_CANCELLED:
        _after_commit(notify_request_resolved_task, req)

    req.refresh_from_db()
    return req


def transition_unit(unit_model, unit_id, requester, target_status):
    """
    Close an OPEN unit as COMPLETED or CANCELLED.

    The conditional UPDATE (status=OPEN) picks exactly one winner among
    concurrent callers. Completion rewards go out in the same transaction.
    """
    closing = (unit_model.STATUS_COMPLETED, unit_model.STATUS_CANCELLED)
    if target_status not in closing:
        raise ValidationError({"status": [f"Status must be one of {', '.join(closing)}."]})

    unit = _get_unit(unit_model, unit_id)
    label = unit.LABEL
    verb = "complete" if target_status == unit_model.STATUS_COMPLETED else "cancel"

    if unit.owner_id != requester.pk:
        logger.warning(
            f"Unit transition denied: {label}={unit.pk}, to={target_status}, actor={requester.pk}"
        )
        raise PermissionDenied(f"Only {unit.OWNER_TITLE} can {verb} the {label}")

    already_closed = f"{label.capitalize()} is already closed"
    if unit.status != unit_model.STATUS_OPEN:
        logger.warning(
            f"Invalid unit transition attempted: {label}={unit.pk}, "
            f"from={unit.status}, to={target_status}, actor={requester.pk}"
        )
        raise InvalidOperation(already_closed)

    with transaction.atomic():
        updated = unit_model.objects.filter(
            pk=unit.pk, status=unit_model.STATUS_OPEN
        ).update(status=target_status, updated_at=timezone.now())
        if updated != 1:
            raise InvalidOperation(already_closed)

        if target_status == unit_model.STATUS_COMPLETED:
            member_ids = list(unit.members.values_list("user_id", flat=True))
            TrustEngine.award(
                member_ids,
                unit.COMPLETION_REWARD,
                TrustEngine.reason_for(unit, "completed"),
                unit,
            )

    logger.info(
        f"Unit state transition: {label}={unit.pk}, "
        f"from={unit_model.STATUS_OPEN}, to={target_status}, actor={requester.pk}"
    )

    unit.refresh_from_db()
    return unit
