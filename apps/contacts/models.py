from django.conf import settings
from django.db import models
from taggit.managers import TaggableManager

from apps.core.utils import isoformat


class Contact(models.Model):

    # Ownership
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='contacts', help_text='Which user owns this contact')

    # Basic Information
    name = models.CharField(max_length=200, help_text="Contact's full name")
    email = models.EmailField(blank=True, null=True, help_text='Email address (optional)')
    phone = models.CharField(max_length=30, blank=True, null=True, help_text='Phone number')
    company = models.CharField(max_length=200, blank=True, null=True, help_text='Company the contact works for')
    title = models.CharField(max_length=200, blank=True, null=True, help_text='Job title')
    address = models.TextField(blank=True, null=True)
    website = models.URLField(blank=True, null=True)

    tags = TaggableManager(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        verbose_name = 'Contact'
        verbose_name_plural = 'Contacts'
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['user', '-updated_at'], name='contact_user_updated_idx'),
            models.Index(fields=['user', 'company'], name='contact_user_company_idx'),
        ]

    def __str__(self):
        """String representation: Name (Company)"""
        if self.company:
            return f"{self.name} ({self.company})"
        return self.name

    def get_initials(self):
        """Returns first letters for avatar: 'Sara Adel' → 'SA'"""
        parts = self.name.split()
        if len(parts) >= 2:
            return f"{parts[0][0]}{parts[1][0]}".upper()
        elif len(parts) == 1:
            return parts[0][0].upper()
        return "?"

    def get_headline(self):
        """'Buyer at Acme', 'Buyer' or 'Contact'"""
        role = self.title or 'Contact'
        if self.company:
            return f"{role} at {self.company}"
        return role

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'company': self.company,
            'title': self.title,
            'address': self.address,
            'website': self.website,
            'tags': sorted(tag.name for tag in self.tags.all()),
            'initials': self.get_initials(),
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def to_summary(self):
        """Short form embedded in opportunities, communications and documents"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'company': self.company,
        }
