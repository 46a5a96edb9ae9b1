"""Keep product ratings in step with their reviews."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Product, Review


@receiver(post_save, sender=Review)
@receiver(post_delete, sender=Review)
def refresh_product_rating(sender, instance, **kwargs):
    product = Product.objects.filter(pk=instance.product_id).first()
    if product is not None:
        product.update_average_rating()
