from django.contrib import admin
from .models import Contact


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):

    list_display = ['id', 'name', 'email', 'phone', 'company', 'title', 'user', 'updated_at']
    list_filter = ['user', 'created_at']
    search_fields = ['name', 'email', 'phone', 'company', 'title']
    ordering = ['-updated_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Basic Information', {
            'fields': ['user', 'name', 'email', 'phone']
        }),
        ('Work', {
            'fields': ['company', 'title', 'website', 'address']
        }),
        ('Additional Info', {
            'fields': ['tags'],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user')
