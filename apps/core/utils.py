"""
Helper utilities shared by the CRM API views
"""
import json

from django.conf import settings
from django.core.paginator import Paginator
from django.db import models
from django.utils import timezone
from taggit.utils import parse_tags

from .exceptions import NotFound, ValidationError


CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'INR': '₹',
    'EGP': 'E£',
}


def parse_json_body(request):
    """
    Decode a JSON object body

    Raises:
        ValidationError: body is not valid JSON or not an object
    """
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError('Invalid JSON format')
    if not isinstance(data, dict):
        raise ValidationError('JSON body must be an object')
    return data


def bind_partial(form_class, instance, data, **kwargs):
    """
    Bind a ModelForm for a partial update

    Keys present in data override the instance's current values; everything
    else keeps what is stored.
    """
    current = form_class(instance=instance, **kwargs).initial
    return form_class({**current, **data}, instance=instance, **kwargs)


def parse_tag_list(value):
    """
    Accept ['vip', 'retail'] or 'vip, retail' and return clean tag names

    Raises:
        ValidationError: value is neither a list of strings nor a string
    """
    if value is None:
        return []
    if isinstance(value, str):
        return parse_tags(value)
    if isinstance(value, list) and all(isinstance(tag, str) for tag in value):
        return sorted({tag.strip() for tag in value if tag.strip()})
    raise ValidationError(details={'tags': ['Tags must be a list of strings']})


def get_owned_object(queryset, user, pk, label='Object'):
    """
    Fetch one row owned by user

    A row that exists but belongs to someone else is reported exactly like a
    missing row, so callers can't probe other users' ids.
    """
    if isinstance(queryset, type) and issubclass(queryset, models.Model):
        queryset = queryset.objects.all()
    try:
        return queryset.get(pk=pk, user=user)
    except (queryset.model.DoesNotExist, ValueError, TypeError):
        raise NotFound(f'{label} not found')


def paginate(request, queryset, default_limit=None, max_limit=None):
    """
    Paginate a queryset from ?page=&limit= query parameters

    Returns:
        tuple: (page object, pagination dict for the response)
    """
    default_limit = default_limit or settings.PAGINATION_SIZE
    max_limit = max_limit or settings.PAGINATION_MAX_SIZE

    try:
        page_number = int(request.GET.get('page') or 1)
        limit = int(request.GET.get('limit') or default_limit)
    except ValueError:
        raise ValidationError('Invalid pagination parameters')

    if page_number < 1 or limit < 1:
        raise ValidationError('Invalid pagination parameters')

    limit = min(limit, max_limit)
    paginator = Paginator(queryset, limit)
    page_obj = paginator.get_page(page_number)

    return page_obj, {
        'page': page_obj.number,
        'limit': limit,
        'total': paginator.count,
        'total_pages': paginator.num_pages,
    }


def format_currency(value, currency='USD'):
    """Format an amount for display: 1234.5, 'USD' -> '$1,234.50'"""
    if value is None:
        return None
    amount = float(value)
    currency = (currency or 'USD').upper()
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{amount:,.2f}"
    return f"{currency} {amount:,.2f}"


def format_file_size(size):
    """Bytes as megabytes with one decimal: 1572864 -> '1.5 MB'"""
    return f"{(size or 0) / 1024 / 1024:.1f} MB"


def time_since(moment):
    """Returns time elapsed since moment: '3 days ago', 'Just now'"""
    if moment is None:
        return None

    delta = timezone.now() - moment

    if delta.days > 30:
        months = delta.days // 30
        return f"{months} month{'s' if months > 1 else ''} ago"
    elif delta.days > 0:
        return f"{delta.days} day{'s' if delta.days > 1 else ''} ago"
    elif delta.days < 0:
        return "Just now"
    elif delta.seconds >= 3600:
        hours = delta.seconds // 3600
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    elif delta.seconds >= 60:
        minutes = delta.seconds // 60
        return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
    else:
        return "Just now"


def isoformat(value):
    return value.isoformat() if value else None


def decimal_to_float(value):
    return float(value) if value is not None else None
