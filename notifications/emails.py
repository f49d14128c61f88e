# notifications/emails.py
from django.core.mail import send_mail
from django.conf import settings


SUBJECTS = {
    "team": {
        "join": "New join request for your team",
        "invite": "You have been invited to join a hack team",
        "accepted": "Your request has been approved!",
        "rejected": "Your team request was not approved",
        "invite_accepted": "Your team invite was accepted",
        "invite_declined": "Your team invite was declined",
    },
    "project": {
        "join": "New collaboration request for your project",
        "invite": "You have been invited to collaborate on a project",
        "accepted": "Collaboration request accepted!",
        "rejected": "Your project collaboration request was not approved",
        "invite_accepted": "Your collaboration invite was accepted",
        "invite_declined": "Your collaboration invite was declined",
    },
}


def build_unit_url(unit):
    """
    Absolute frontend URL of the unit page (APP_URL + unit path).
    """
    return f"{settings.APP_URL}{unit.page_path}"


def _deliver(subject, message, recipient):
    send_mail(
        subject=subject,
        message=message,
        from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        recipient_list=[recipient],
        fail_silently=False,
    )


def send_join_request_email(join_request):
    """
    Tell the unit's contact address that someone wants to join.
    """
    unit = join_request.unit
    recipient = unit.notify_email
    if not recipient:
        return False

    sender = join_request.sender
    message = (
        f"Hi {unit.owner.display_name},\n\n"
        f"{sender.display_name} ({sender.email}) wants to join {unit.display_name}.\n\n"
        f"Message:\n{join_request.message}\n\n"
        f"GitHub: {join_request.github_url}\n"
        f"LinkedIn: {join_request.linkedin_url}\n\n"
        f"Review the request here:\n"
        f"{build_unit_url(unit)}\n\n"
        f"Thanks,\n"
        f"togethr"
    )
    _deliver(SUBJECTS[unit.LABEL]["join"], message, recipient)
    return True


def send_invite_email(invite):
    unit = invite.unit
    invitee = invite.receiver
    if not invitee.email:
        return False

    message = (
        f"Hi {invitee.display_name},\n\n"
        f"{invite.sender.display_name} invited you to join {unit.display_name}.\n\n"
        f"{invite.message}\n\n"
        f"Take a look:\n"
        f"{build_unit_url(unit)}\n\n"
        f"Thanks,\n"
        f"togethr"
    )
    _deliver(SUBJECTS[unit.LABEL]["invite"], message, invitee.email)
    return True


def send_request_resolved_email(req):
    """
    Tell the request's sender that it was accepted or rejected.

    For an invite the sender is the owner, so the mail reports what the
    invitee decided.
    """
    unit = req.unit
    sender = req.sender
    if not sender.email:
        return False

    accepted = req.status == req.STATUS_ACCEPTED
    if req.type == req.TYPE_INVITE:
        invitee = req.receiver
        verb = "accepted" if accepted else "declined"
        body = f"{invitee.display_name} {verb} your invite to {unit.display_name}.\n"
        if accepted:
            body += "They are now a member, say hello:\n"
        else:
            body += "You can invite someone else from the page:\n"
        subject_key = f"invite_{verb}"
    elif accepted:
        body = (
            f"Good news! Your request for {unit.display_name} was accepted.\n"
            f"You are now part of it, reach out to your new teammates:\n"
        )
        subject_key = "accepted"
    else:
        body = (
            f"Your request for {unit.display_name} was not approved this time.\n"
            f"There are plenty of other teams and projects looking for people:\n"
        )
        subject_key = "rejected"

    message = (
        f"Hi {sender.display_name},\n\n"
        f"{body}"
        f"{build_unit_url(unit)}\n\n"
        f"Thanks,\n"
        f"togethr"
    )
    _deliver(SUBJECTS[unit.LABEL][subject_key], message, sender.email)
    return True
