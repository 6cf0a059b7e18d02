from django.contrib import admin

from modules.orders.models import Order, OrderLine


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    can_delete = False
    readonly_fields = ("product", "position", "quantity", "price_at_purchase")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Orders are placed through the API; the admin only edits status."""

    list_display = ("id", "customer", "status", "total_amount", "created_at")
    list_filter = ("status",)
    readonly_fields = ("customer", "total_amount", "created_at", "updated_at")
    inlines = [OrderLineInline]

    def has_add_permission(self, request):
        return False
