from django.contrib import admin

from .models import Category, Product, ProductImage, ProductMetaTag, Review


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 0


class ProductMetaTagInline(admin.TabularInline):
    model = ProductMetaTag
    extra = 0


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "parent", "is_active", "sort_order"]
    list_filter = ["is_active"]
    search_fields = ["name", "slug"]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["name", "price", "category_name", "stock", "avg_rating", "created_at"]
    list_filter = ["category"]
    search_fields = ["name", "description"]
    inlines = [ProductImageInline, ProductMetaTagInline]


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ["product", "rating", "name", "user", "is_anonymous", "created_at"]
    list_filter = ["rating", "is_anonymous"]
