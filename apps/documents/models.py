from django.conf import settings
from django.db import models

from apps.core.utils import format_file_size, isoformat


class Document(models.Model):

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='documents')
    contact = models.ForeignKey('contacts.Contact', on_delete=models.SET_NULL, null=True, blank=True, related_name='documents')
    opportunity = models.ForeignKey('opportunities.Opportunity', on_delete=models.SET_NULL, null=True, blank=True, related_name='documents')

    # File Information
    filename = models.CharField(max_length=255, help_text='Stored file name')
    original_name = models.CharField(max_length=255, help_text='Name of the file as uploaded')
    mime_type = models.CharField(max_length=100, default='application/octet-stream')
    size = models.PositiveBigIntegerField(help_text='Size in bytes')
    upload_path = models.CharField(max_length=500, help_text='Path relative to the upload directory')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Document'
        verbose_name_plural = 'Documents'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='doc_user_created_idx'),
        ]

    def __str__(self):
        return self.original_name

    def get_formatted_size(self):
        return format_file_size(self.size)

    def get_subtitle(self):
        if self.contact:
            return self.contact.name
        if self.opportunity:
            return self.opportunity.title
        return 'Document'

    def to_dict(self):
        return {
            'id': self.id,
            'filename': self.filename,
            'original_name': self.original_name,
            'mime_type': self.mime_type,
            'size': self.size,
            'formatted_size': self.get_formatted_size(),
            'contact': self.contact.to_summary() if self.contact else None,
            'opportunity': self.opportunity.to_summary() if self.opportunity else None,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
