from django import forms

from apps.contacts.models import Contact
from apps.opportunities.models import Opportunity
from .models import Communication


class CommunicationForm(forms.ModelForm):
    class Meta:
        model = Communication
        fields = ['type', 'direction', 'subject', 'content', 'contact', 'opportunity', 'scheduled_date', 'completed_date']

        error_messages = {
            'type': {'required': 'Type is required', 'invalid_choice': 'Invalid communication type'},
            'direction': {'required': 'Direction is required', 'invalid_choice': 'Invalid direction'},
            'contact': {'invalid_choice': 'Contact not found'},
            'opportunity': {'invalid_choice': 'Opportunity not found'},
        }

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

        # Only the owner's contacts/opportunities are valid references
        if self.user:
            self.fields['contact'].queryset = Contact.objects.filter(user=self.user)
            self.fields['opportunity'].queryset = Opportunity.objects.filter(user=self.user)

    def save(self, commit=True):
        communication = super().save(commit=False)
        if self.user and not communication.user_id:
            communication.user = self.user
        if commit:
            communication.save()
        return communication


class CommunicationFilterForm(forms.Form):
    type = forms.ChoiceField(choices=[('', 'All')] + Communication.TYPE_CHOICES, required=False)
    contact = forms.IntegerField(required=False, min_value=1)
    opportunity = forms.IntegerField(required=False, min_value=1)
    query = forms.CharField(required=False)
