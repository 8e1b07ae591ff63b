from django.contrib import admin
from .models import DivingCylinderSet, DivingCylinder


class DivingCylinderInline(admin.TabularInline):
    model = DivingCylinder
    extra = 0


@admin.register(DivingCylinderSet)
class DivingCylinderSetAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'archived', 'created_at']
    list_filter = ['archived']
    search_fields = ['name', 'owner__email']
    raw_id_fields = ['owner']
    inlines = [DivingCylinderInline]
