from django.contrib import admin
from .models import FillEvent, PaymentEvent, FillEventPaymentEvent


class FillEventPaymentEventInline(admin.TabularInline):
    model = FillEventPaymentEvent
    extra = 0
    raw_id_fields = ['fill_event']


@admin.register(FillEvent)
class FillEventAdmin(admin.ModelAdmin):
    list_display = ['gas_mixture', 'user', 'cylinder_set', 'price', 'created_at']
    search_fields = ['user__email', 'gas_mixture', 'description']
    raw_id_fields = ['user', 'cylinder_set']
    date_hierarchy = 'created_at'


@admin.register(PaymentEvent)
class PaymentEventAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'status', 'total_amount', 'created_at']
    list_filter = ['status']
    search_fields = ['user__email']
    raw_id_fields = ['user']
    inlines = [FillEventPaymentEventInline]
