from django.contrib import admin

from .models import FeaturedProduct, HomepageSection


@admin.register(HomepageSection)
class HomepageSectionAdmin(admin.ModelAdmin):
    list_display = ["section_name", "title", "is_active", "sort_order"]
    list_filter = ["is_active"]


@admin.register(FeaturedProduct)
class FeaturedProductAdmin(admin.ModelAdmin):
    list_display = ["product", "is_active", "sort_order"]
