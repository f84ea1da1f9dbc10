from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone
from taggit.managers import TaggableManager

from apps.core.utils import decimal_to_float, format_currency, isoformat


class OpportunityStatus(models.TextChoices):
    """
    Pipeline stages, in board order

    Entering a closed stage has side effects on the opportunity; see apply_to().
    """

    LEAD = 'lead', 'Lead'
    QUALIFIED = 'qualified', 'Qualified'
    PROPOSAL = 'proposal', 'Proposal'
    NEGOTIATING = 'negotiating', 'Negotiating'
    CLOSED_WON = 'closed-won', 'Closed Won'
    CLOSED_LOST = 'closed-lost', 'Closed Lost'

    @property
    def is_closed(self):
        return self in (OpportunityStatus.CLOSED_WON, OpportunityStatus.CLOSED_LOST)

    @classmethod
    def closed(cls):
        return [cls.CLOSED_WON, cls.CLOSED_LOST]

    def apply_to(self, opportunity, won_date=None, lost_reason=None):
        """
        Bookkeeping for an opportunity sitting in this stage

        closed-won:  probability 100, won_date set (given, kept or now)
        closed-lost: probability 0, lost_reason set (given, kept or 'Not specified')
        either:      actual_close_date stamped with today when empty
        """
        if self == OpportunityStatus.CLOSED_WON:
            opportunity.probability = 100
            opportunity.won_date = won_date or opportunity.won_date or timezone.now()
        elif self == OpportunityStatus.CLOSED_LOST:
            opportunity.probability = 0
            opportunity.lost_reason = lost_reason or opportunity.lost_reason or 'Not specified'

        if self.is_closed and opportunity.actual_close_date is None:
            opportunity.actual_close_date = timezone.localdate()

        return opportunity


class Opportunity(models.Model):

    # Ownership
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='opportunities', help_text='Which user owns this opportunity')
    contact = models.ForeignKey('contacts.Contact', on_delete=models.SET_NULL, null=True, blank=True, related_name='opportunities', help_text='Main contact for this deal')

    # Deal Information
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    value = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True, help_text='Deal value (optional)')
    currency = models.CharField(max_length=3, default='USD')

    # Pipeline position
    status = models.CharField(max_length=20, choices=OpportunityStatus.choices, default=OpportunityStatus.LEAD, db_index=True)
    probability = models.PositiveSmallIntegerField(default=10, validators=[MinValueValidator(0), MaxValueValidator(100)], help_text='Chance of closing (0-100)')
    stage_order = models.PositiveIntegerField(default=0, help_text='Position inside its kanban column')

    # Closing
    expected_close_date = models.DateField(null=True, blank=True)
    actual_close_date = models.DateField(null=True, blank=True)
    won_date = models.DateTimeField(null=True, blank=True)
    lost_reason = models.CharField(max_length=255, blank=True, null=True)

    tags = TaggableManager(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Opportunity'
        verbose_name_plural = 'Opportunities'
        ordering = ['status', 'stage_order', '-updated_at']
        indexes = [
            models.Index(fields=['user', 'status', 'stage_order'], name='opp_user_status_order_idx'),
            models.Index(fields=['user', '-updated_at'], name='opp_user_updated_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @property
    def is_closed(self):
        return OpportunityStatus(self.status).is_closed

    def apply_status_effects(self, won_date=None, lost_reason=None):
        return OpportunityStatus(self.status).apply_to(self, won_date=won_date, lost_reason=lost_reason)

    def get_formatted_value(self):
        return format_currency(self.value, self.currency)

    def get_subtitle(self):
        """'Sara Adel (Acme)' when linked to a contact, else 'Opportunity'"""
        if self.contact:
            if self.contact.company:
                return f"{self.contact.name} ({self.contact.company})"
            return self.contact.name
        return 'Opportunity'

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'value': decimal_to_float(self.value),
            'currency': self.currency,
            'formatted_value': self.get_formatted_value(),
            'status': self.status,
            'status_display': self.get_status_display(),
            'probability': self.probability,
            'stage_order': self.stage_order,
            'expected_close_date': isoformat(self.expected_close_date),
            'actual_close_date': isoformat(self.actual_close_date),
            'won_date': isoformat(self.won_date),
            'lost_reason': self.lost_reason,
            'tags': sorted(tag.name for tag in self.tags.all()),
            'contact': self.contact.to_summary() if self.contact else None,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def to_summary(self):
        return {'id': self.id, 'title': self.title}
