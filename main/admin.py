from django.contrib import admin

from main.infra.models import (
    IdempotencyKey,
    OrderItemORM,
    OrderORM,
    ProductORM,
    ReviewORM,
    UserORM,
)


@admin.register(UserORM)
class UserAdmin(admin.ModelAdmin):
    list_display = ("id", "first_name", "last_name", "email", "created_at")
    search_fields = ("first_name", "last_name", "email")


@admin.register(ProductORM)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "sale_price", "stock_quantity", "is_available", "average_rating")
    list_filter = ("is_available",)
    search_fields = ("name", "sku")
    # Stock and rating only change through ProductLedger / RatingAggregator.
    readonly_fields = ("stock_quantity", "is_available", "average_rating")


class OrderItemInline(admin.TabularInline):
    model = OrderItemORM
    extra = 0
    can_delete = False
    readonly_fields = ("position", "product", "quantity", "unit_price", "discount_amount", "subtotal")


@admin.register(OrderORM)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("order_number", "user", "order_status", "payment_status", "total_amount", "order_date")
    list_filter = ("order_status", "payment_status", "order_date")
    search_fields = ("order_number", "user__email")
    readonly_fields = ("order_number", "order_date", "total_amount", "order_status", "payment_status")
    inlines = [OrderItemInline]


@admin.register(ReviewORM)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "product_id", "user_id", "rating", "is_verified_purchase", "created_at")
    list_filter = ("rating", "is_verified_purchase", "created_at")
    search_fields = ("title", "username")


@admin.register(IdempotencyKey)
class IdempotencyAdmin(admin.ModelAdmin):
    list_display = ("key", "user_id", "operation", "created_at")
    list_filter = ("operation", "created_at")
    search_fields = ("key", "user_id")
