"""
Factory Boy factories for media models.

Usage:
    from media.tests.factories import MediaObjectFactory, bind

    pending = MediaObjectFactory(user=user)
    bound = bind(MediaObjectFactory(user=record.user), record, order=0)
"""

import uuid

import factory

from media.models import MediaObject
from posts.tests.factories import UserFactory


class MediaObjectFactory(factory.django.DjangoModelFactory):
    """
    Factory for MediaObject.

    Creates PENDING, unbound media with CDN-style refs.
    """

    class Meta:
        model = MediaObject

    id = factory.LazyFunction(uuid.uuid4)
    user = factory.SubFactory(UserFactory)
    client_key = factory.Sequence(lambda n: f"key-{n}")
    status = MediaObject.Status.PENDING
    content_type = "image/jpeg"
    original_url = factory.LazyAttribute(
        lambda o: f"https://cdn.test/images/{o.user.pk}/{o.id}_original.jpg"
    )
    thumbnail_url = factory.LazyAttribute(
        lambda o: f"https://cdn.test/images/{o.user.pk}/{o.id}_thumbnail.jpg"
    )


def bind(media, entity, order, lat=25.03, lng=121.56):
    """Mark media COMPLETED under entity at the given display order."""
    media.status = MediaObject.Status.COMPLETED
    setattr(media, entity.kind, entity)
    media.display_order = order
    media.lat = lat
    media.lng = lng
    media.save()
    return media


def bound_media(entity, count):
    """Create count media bound to entity at orders 0..count-1."""
    return [
        bind(MediaObjectFactory(user=entity.user), entity, order)
        for order in range(count)
    ]
