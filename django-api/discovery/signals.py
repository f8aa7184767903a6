"""Django signals for cache invalidation.

The candidate catalog is cached as a whole, so any write to an event or one
of its ticket types drops it.
"""

import logging

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from discovery.models import Event, TicketType
from discovery.stores.django_store import CATALOG_CACHE_KEY

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate the catalog when an event is saved or deleted."""
    cache.delete(CATALOG_CACHE_KEY)
    logger.debug("Catalog cache invalidated by event %s", instance.pk)


@receiver([post_save, post_delete], sender=TicketType)
def invalidate_ticket_type_cache(sender, instance, **kwargs):
    """Invalidate the catalog when a ticket type is saved or deleted."""
    cache.delete(CATALOG_CACHE_KEY)
    logger.debug("Catalog cache invalidated by ticket type %s", instance.pk)
