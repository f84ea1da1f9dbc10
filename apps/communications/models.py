from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.utils import isoformat, time_since


class Communication(models.Model):

    # Type choices
    TYPE_CHOICES = [
        ('email', 'Email'),
        ('phone', 'Phone'),
        ('meeting', 'Meeting'),
        ('task', 'Task'),
    ]

    # Direction choices
    DIRECTION_CHOICES = [
        ('inbound', 'Inbound'),
        ('outbound', 'Outbound'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='communications')
    contact = models.ForeignKey('contacts.Contact', on_delete=models.SET_NULL, null=True, blank=True, related_name='communications')
    opportunity = models.ForeignKey('opportunities.Opportunity', on_delete=models.SET_NULL, null=True, blank=True, related_name='communications')

    type = models.CharField(max_length=20, choices=TYPE_CHOICES, db_index=True)
    direction = models.CharField(max_length=10, choices=DIRECTION_CHOICES)
    subject = models.CharField(max_length=255, blank=True, null=True)
    content = models.TextField(blank=True, null=True)

    scheduled_date = models.DateTimeField(null=True, blank=True, db_index=True, help_text='When the call/meeting/task is planned')
    completed_date = models.DateTimeField(null=True, blank=True, help_text='When it actually happened')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Communication'
        verbose_name_plural = 'Communications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='comm_user_created_idx'),
            models.Index(fields=['user', 'type'], name='comm_user_type_idx'),
        ]

    def __str__(self):
        return self.get_title()

    @property
    def status(self):
        """completed / scheduled / overdue, or None when nothing is planned"""
        if self.completed_date:
            return 'completed'
        if self.scheduled_date:
            if self.scheduled_date > timezone.now():
                return 'scheduled'
            return 'overdue'
        return None

    def get_title(self):
        """Subject, or 'Phone - inbound' when there is none"""
        if self.subject:
            return self.subject
        return f"{self.get_type_display()} - {self.direction}"

    def get_subtitle(self):
        if self.contact:
            return self.contact.name
        if self.opportunity:
            return self.opportunity.title
        return 'Communication'

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type,
            'direction': self.direction,
            'subject': self.subject,
            'content': self.content,
            'status': self.status,
            'scheduled_date': isoformat(self.scheduled_date),
            'completed_date': isoformat(self.completed_date),
            'contact': self.contact.to_summary() if self.contact else None,
            'opportunity': self.opportunity.to_summary() if self.opportunity else None,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'time_since': time_since(self.created_at),
        }
