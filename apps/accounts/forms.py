from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _
from django.core.exceptions import ValidationError

from .models import UserProfile

User = get_user_model()


# LOGIN FORM
class LoginForm(forms.Form):
    email = forms.EmailField(label=_('Email Address'), max_length=255, required=True)
    password = forms.CharField(label=_('Password'), required=True, strip=False)
    remember = forms.BooleanField(label=_('Remember me'), required=False, initial=False)

    def clean_email(self):
        email = self.cleaned_data.get('email', '')
        return email.lower().strip()


# REGISTER FORM
class RegisterForm(forms.Form):
    name = forms.CharField(label=_('Name'), max_length=101, required=True, error_messages={'required': _('Name is required')})
    email = forms.EmailField(label=_('Email Address'), max_length=255, required=True, error_messages={'invalid': _('Invalid email address')})
    password = forms.CharField(label=_('Password'), required=True, strip=False)

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()
        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError(_('A user with this email already exists.'))
        return email

    def clean_password(self):
        password = self.cleaned_data.get('password')
        validate_password(password)
        return password

    def save(self):
        """Create the user; 'Sara Adel Omar' -> first_name='Sara', last_name='Adel Omar'"""
        first_name, _sep, last_name = self.cleaned_data['name'].strip().partition(' ')
        return User.objects.create_user(
            email=self.cleaned_data['email'],
            password=self.cleaned_data['password'],
            first_name=first_name[:50],
            last_name=last_name.strip()[:50],
        )


# PREFERENCES FORM
class PreferencesForm(forms.Form):
    """
    Partial update of a UserProfile

    Only keys present in the submitted data are applied, so
    {"theme": "dark"} leaves timezone and preferences untouched.
    """

    theme = forms.ChoiceField(choices=UserProfile.THEME_CHOICES, required=False)
    timezone = forms.CharField(max_length=64, required=False)
    preferences = forms.JSONField(required=False)

    def clean_timezone(self):
        value = self.cleaned_data.get('timezone')
        if value:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError):
                raise ValidationError(_('Unknown timezone'))
        return value

    def clean_preferences(self):
        value = self.cleaned_data.get('preferences')
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValidationError(_('Preferences must be an object'))
        return value

    def save(self, profile):
        update_fields = []
        for field in ('theme', 'timezone', 'preferences'):
            if field in self.data and (field == 'preferences' or self.cleaned_data.get(field)):
                setattr(profile, field, self.cleaned_data[field])
                update_fields.append(field)

        if update_fields:
            profile.save(update_fields=update_fields + ['updated_at'])
        return profile
