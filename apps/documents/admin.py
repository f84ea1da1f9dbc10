from django.contrib import admin
from .models import Document


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ['id', 'original_name', 'mime_type', 'size', 'contact', 'opportunity', 'user', 'created_at']
    list_filter = ['mime_type', 'created_at']
    search_fields = ['original_name', 'filename']
    raw_id_fields = ['contact', 'opportunity']
    readonly_fields = ['filename', 'upload_path', 'size', 'mime_type', 'created_at', 'updated_at']
