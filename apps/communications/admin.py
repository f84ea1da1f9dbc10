from django.contrib import admin
from .models import Communication


@admin.register(Communication)
class CommunicationAdmin(admin.ModelAdmin):
    list_display = ['id', 'type', 'direction', 'subject', 'contact', 'opportunity', 'scheduled_date', 'completed_date', 'created_at']
    list_filter = ['type', 'direction', 'created_at']
    search_fields = ['subject', 'content', 'contact__name']
    raw_id_fields = ['contact', 'opportunity']
    date_hierarchy = 'created_at'
    readonly_fields = ['created_at', 'updated_at']
