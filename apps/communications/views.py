import logging
from datetime import timedelta

from django.db.models import Q, Count
from django.http import JsonResponse
from django.utils import timezone

from apps.accounts.decorators import api_login_required
from apps.core.decorators import api_view
from apps.core.exceptions import ValidationError
from apps.core.utils import bind_partial, get_owned_object, paginate, parse_json_body
from .forms import CommunicationForm, CommunicationFilterForm
from .models import Communication

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


def get_weekly_stats(user):
    """Communications logged in the last 7 days, per type"""
    week_ago = timezone.now() - timedelta(days=7)

    counts = {
        row['type']: row['count']
        for row in Communication.objects.filter(user=user, created_at__gte=week_ago)
        .values('type')
        .annotate(count=Count('id'))
        .order_by()
    }

    stats = {value: counts.get(value, 0) for value, _label in Communication.TYPE_CHOICES}
    stats['total'] = sum(counts.values())
    return stats


@api_view('GET', 'POST')
@api_login_required
def communication_collection_view(request):
    if request.method == 'POST':
        form = CommunicationForm(parse_json_body(request), user=request.user)

        if not form.is_valid():
            raise ValidationError.from_form(form)

        communication = form.save()
        return JsonResponse(communication.to_dict(), status=201)

    filter_form = CommunicationFilterForm(request.GET)
    if not filter_form.is_valid():
        raise ValidationError.from_form(filter_form)

    communications = Communication.objects.filter(user=request.user)

    if filter_form.cleaned_data.get('type'):
        communications = communications.filter(type=filter_form.cleaned_data['type'])

    if filter_form.cleaned_data.get('contact'):
        communications = communications.filter(contact_id=filter_form.cleaned_data['contact'])

    if filter_form.cleaned_data.get('opportunity'):
        communications = communications.filter(opportunity_id=filter_form.cleaned_data['opportunity'])

    query = filter_form.cleaned_data.get('query', '').strip()
    if query:
        communications = communications.filter(
            Q(subject__icontains=query) |
            Q(content__icontains=query)
        )

    communications = communications.select_related('contact', 'opportunity').order_by('-created_at')
    page_obj, pagination = paginate(request, communications, default_limit=DEFAULT_LIMIT)

    return JsonResponse({
        'communications': [communication.to_dict() for communication in page_obj],
        'pagination': pagination,
        'stats': get_weekly_stats(request.user),
    })


@api_view('GET', 'PUT', 'DELETE')
@api_login_required
def communication_detail_view(request, pk):
    communication = get_owned_object(
        Communication.objects.select_related('contact', 'opportunity'), request.user, pk, label='Communication'
    )

    if request.method == 'PUT':
        form = bind_partial(CommunicationForm, communication, parse_json_body(request), user=request.user)

        if not form.is_valid():
            raise ValidationError.from_form(form)

        communication = form.save()
        return JsonResponse(communication.to_dict())

    if request.method == 'DELETE':
        communication.delete()
        logger.info(f"Communication {pk} deleted by user {request.user.pk}")
        return JsonResponse({'message': 'Communication deleted successfully'})

    return JsonResponse(communication.to_dict())
