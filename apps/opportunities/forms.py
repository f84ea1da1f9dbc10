from django import forms

from apps.contacts.models import Contact
from .models import Opportunity, OpportunityStatus


class OpportunityForm(forms.ModelForm):
    """
    Create / edit an opportunity

    The contact dropdown only offers the owner's contacts, so a foreign
    contact id fails validation like any unknown id.
    """

    # Fields with a model default may be left out of the payload
    DEFAULTED_FIELDS = ('currency', 'status', 'probability', 'stage_order')

    class Meta:
        model = Opportunity
        fields = [
            'contact', 'title', 'description', 'value', 'currency', 'status', 'probability',
            'stage_order', 'expected_close_date', 'actual_close_date', 'won_date', 'lost_reason',
        ]

        error_messages = {
            'title': {'required': 'Title is required'},
            'contact': {'invalid_choice': 'Contact not found'},
            'status': {'invalid_choice': 'Invalid status'},
        }

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

        if self.user:
            self.fields['contact'].queryset = Contact.objects.filter(user=self.user)

        for name in self.DEFAULTED_FIELDS:
            self.fields[name].required = False

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise forms.ValidationError('Title is required')
        return title

    def clean_value(self):
        value = self.cleaned_data.get('value')
        if value is not None and value <= 0:
            raise forms.ValidationError('Value must be positive')
        return value

    def clean_currency(self):
        currency = (self.cleaned_data.get('currency') or '').strip().upper()
        return currency or None

    def clean(self):
        cleaned_data = super().clean()
        for name in self.DEFAULTED_FIELDS:
            if cleaned_data.get(name) in (None, ''):
                cleaned_data[name] = Opportunity._meta.get_field(name).get_default()
        return cleaned_data

    def save(self, commit=True):
        opportunity = super().save(commit=False)
        if self.user and not opportunity.user_id:
            opportunity.user = self.user

        opportunity.apply_status_effects(
            won_date=self.cleaned_data.get('won_date'),
            lost_reason=self.cleaned_data.get('lost_reason'),
        )

        if commit:
            opportunity.save()
        return opportunity


class OpportunityFilterForm(forms.Form):
    query = forms.CharField(required=False)
    status = forms.ChoiceField(choices=[('', 'All')] + OpportunityStatus.choices, required=False)
    contact = forms.IntegerField(required=False, min_value=1)
