from django import forms
from django.conf import settings

from apps.contacts.models import Contact
from apps.opportunities.models import Opportunity
from apps.core.utils import format_file_size


class DocumentUploadForm(forms.Form):
    file = forms.FileField(error_messages={'required': 'No file provided'})
    contact = forms.ModelChoiceField(queryset=Contact.objects.none(), required=False, error_messages={'invalid_choice': 'Contact not found'})
    opportunity = forms.ModelChoiceField(queryset=Opportunity.objects.none(), required=False, error_messages={'invalid_choice': 'Opportunity not found'})

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

        if self.user:
            self.fields['contact'].queryset = Contact.objects.filter(user=self.user)
            self.fields['opportunity'].queryset = Opportunity.objects.filter(user=self.user)

    def clean_file(self):
        uploaded = self.cleaned_data.get('file')
        max_size = settings.DOCUMENT_MAX_UPLOAD_SIZE
        if uploaded and uploaded.size > max_size:
            raise forms.ValidationError(
                f'File too large. Maximum size is {format_file_size(max_size)}'
            )
        return uploaded


class DocumentFilterForm(forms.Form):
    contact = forms.IntegerField(required=False, min_value=1)
    opportunity = forms.IntegerField(required=False, min_value=1)
    query = forms.CharField(required=False)
