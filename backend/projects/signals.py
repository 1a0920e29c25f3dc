from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import WorkCode
from .resolution import invalidate_work_code_cache


@receiver(post_save, sender=WorkCode)
@receiver(post_delete, sender=WorkCode)
def work_codes_changed(sender, **kwargs):
    invalidate_work_code_cache()
