import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.dispatch import receiver

from accounts.permissions import display_name
from inventory.signals import stock_warning_raised

from .models import Notification

log = logging.getLogger(__name__)


def stock_warning_message(warnings, actor, project=None) -> str:
    head = f"{display_name(actor)} heeft materiaal afgeboekt"
    if project is not None:
        head += f" voor project {project.name}"
    head += " terwijl er onvoldoende voorraad was:"
    return "\n".join([head] + [w.describe() for w in warnings])


@receiver(stock_warning_raised)
def notify_office_of_stock_warning(sender, warnings, actor=None, project=None, **kwargs):
    """One notification per office/admin user, all short lines of the booking in one message."""
    if not warnings:
        return []
    recipients = list(
        get_user_model().objects
        .filter(is_active=True, profile__role__in=settings.BACKOFFICE["NOTIFY_ROLES"])
        .order_by("id")
    )
    if not recipients:
        log.warning("Stock warning for %d line(s) but nobody to notify", len(warnings))
        return []

    message = stock_warning_message(warnings, actor, project)
    sender_user = actor if getattr(actor, "pk", None) else None
    with transaction.atomic():
        created = Notification.objects.bulk_create([
            Notification(
                recipient=user,
                sender=sender_user,
                type=Notification.STOCK_WARNING,
                title="Onvoldoende voorraad",
                message=message,
            )
            for user in recipients
        ])
    log.info("Stock warning sent to %d user(s)", len(created))
    return created
