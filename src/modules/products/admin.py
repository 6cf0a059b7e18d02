from django.contrib import admin

from modules.products.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "unit_price", "stock_quantity", "updated_at")
    search_fields = ("name",)
