from django import forms

from .models import Contact


class ContactForm(forms.ModelForm):
    class Meta:
        model = Contact
        fields = ['name', 'email', 'phone', 'company', 'title', 'address', 'website']

        error_messages = {
            'name': {'required': 'Name is required', 'max_length': 'Name is too long (max 200 characters)'},
            'email': {'invalid': 'Invalid email address'},
            'website': {'invalid': 'Invalid website URL'},
        }

    def clean_email(self):
        email = self.cleaned_data.get('email')
        if email:
            return email.strip().lower()
        return None

    def clean_name(self):
        name = (self.cleaned_data.get('name') or '').strip()
        if not name:
            raise forms.ValidationError('Name is required')
        return name

    def _post_clean(self):
        # Blank optional strings are stored as NULL, not ''
        for field in ('phone', 'company', 'title', 'address', 'website'):
            if self.cleaned_data.get(field) == '':
                self.cleaned_data[field] = None
        super()._post_clean()


class ContactFilterForm(forms.Form):
    query = forms.CharField(required=False)
    company = forms.CharField(required=False)
    tag = forms.CharField(required=False)
