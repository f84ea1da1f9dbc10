from django.contrib import admin
from .models import Opportunity


@admin.register(Opportunity)
class OpportunityAdmin(admin.ModelAdmin):

    list_display = ['id', 'title', 'contact', 'value', 'currency', 'status', 'probability', 'stage_order', 'user', 'updated_at']
    list_filter = ['status', 'currency', 'user']
    search_fields = ['title', 'description', 'contact__name', 'contact__company']
    list_editable = ['status', 'stage_order']
    raw_id_fields = ['contact']
    ordering = ['status', 'stage_order']

    fieldsets = [
        ('Deal', {
            'fields': ['user', 'contact', 'title', 'description', 'value', 'currency']
        }),
        ('Pipeline', {
            'fields': ['status', 'probability', 'stage_order', 'expected_close_date']
        }),
        ('Closing', {
            'fields': ['actual_close_date', 'won_date', 'lost_reason'],
            'classes': ['collapse'],
        }),
        ('Additional Info', {
            'fields': ['tags'],
            'classes': ['collapse'],
        }),
    ]

    def save_model(self, request, obj, form, change):
        obj.apply_status_effects()
        super().save_model(request, obj, form, change)
