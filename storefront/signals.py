import logging

from django.conf import settings
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from .content_editor import invalidate_page_cache
from .models import CMSPage, Profile

logger = logging.getLogger(__name__)


# ==== SIGNALS ====
@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def ensure_profile(sender, instance, created, **kwargs):
    if created:
        Profile.objects.get_or_create(user=instance)


@receiver(post_save, sender=CMSPage)
def cms_page_saved(sender, instance, **kwargs):
    invalidate_page_cache(instance.page_key)


@receiver(post_delete, sender=CMSPage)
def cms_page_deleted(sender, instance, **kwargs):
    logger.info("CMS page %s deleted; falling back to defaults", instance.page_key)
    invalidate_page_cache(instance.page_key)
