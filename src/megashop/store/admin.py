from django.contrib import admin

from .models import Order, OrderItem, OrderTracking, Wishlist


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0


class OrderTrackingInline(admin.StackedInline):
    model = OrderTracking
    extra = 0


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "mobile", "total", "status", "created_at"]
    list_filter = ["status"]
    search_fields = ["name", "email", "mobile"]
    inlines = [OrderItemInline, OrderTrackingInline]


@admin.register(Wishlist)
class WishlistAdmin(admin.ModelAdmin):
    list_display = ["user", "product", "created_at"]
