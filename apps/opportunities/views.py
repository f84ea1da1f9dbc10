import logging

from django.http import JsonResponse

from apps.accounts.decorators import api_login_required
from apps.core.decorators import api_view
from apps.core.exceptions import ValidationError
from apps.core.utils import bind_partial, get_owned_object, parse_json_body, parse_tag_list, isoformat
from .forms import OpportunityForm, OpportunityFilterForm
from .models import Opportunity
from .pipeline import list_kanban, move_opportunity, compute_stats

logger = logging.getLogger(__name__)


def save_opportunity(form, tags):
    opportunity = form.save()
    if tags is not None:
        opportunity.tags.set(tags)
    return opportunity


# PIPELINE / KANBAN
@api_view('GET', 'POST')
@api_login_required
def opportunity_collection_view(request):
    """
    GET:  board for the caller, filtered by ?query=&status=&contact=, plus
          stats over every opportunity they own
    POST: create an opportunity

    The flat `opportunities` list is the board columns concatenated in stage
    order. Clients should not rely on its ordering; use `kanban` instead.
    """
    if request.method == 'POST':
        data = parse_json_body(request)
        tags = parse_tag_list(data.get('tags'))
        form = OpportunityForm(data, user=request.user)

        if not form.is_valid():
            raise ValidationError.from_form(form)

        opportunity = save_opportunity(form, tags)
        logger.info(f"Opportunity {opportunity.pk} created by user {request.user.pk}")
        return JsonResponse(opportunity.to_dict(), status=201)

    filter_form = OpportunityFilterForm(request.GET)
    if not filter_form.is_valid():
        raise ValidationError.from_form(filter_form)

    kanban = list_kanban(
        request.user,
        query=filter_form.cleaned_data.get('query', '').strip() or None,
        status=filter_form.cleaned_data.get('status') or None,
        contact=filter_form.cleaned_data.get('contact'),
    )

    kanban_data = {
        status: [opportunity.to_dict() for opportunity in opportunities]
        for status, opportunities in kanban.items()
    }

    return JsonResponse({
        'opportunities': [item for column in kanban_data.values() for item in column],
        'kanban': kanban_data,
        'stats': compute_stats(request.user),
    })


@api_view('GET', 'PUT', 'DELETE')
@api_login_required
def opportunity_detail_view(request, pk):
    opportunity = get_owned_object(
        Opportunity.objects.select_related('contact'), request.user, pk, label='Opportunity'
    )

    if request.method == 'PUT':
        data = parse_json_body(request)
        tags = parse_tag_list(data['tags']) if 'tags' in data else None
        form = bind_partial(OpportunityForm, opportunity, data, user=request.user)

        if not form.is_valid():
            raise ValidationError.from_form(form)

        opportunity = save_opportunity(form, tags)
        return JsonResponse(opportunity.to_dict())

    if request.method == 'DELETE':
        opportunity.delete()
        logger.info(f"Opportunity {pk} deleted by user {request.user.pk}")
        return JsonResponse({'message': 'Opportunity deleted successfully'})

    data = opportunity.to_dict()
    data['communications'] = [
        {
            'id': communication.id,
            'type': communication.type,
            'direction': communication.direction,
            'subject': communication.subject,
            'created_at': isoformat(communication.created_at),
        }
        for communication in opportunity.communications.filter(user=request.user).order_by('-created_at')[:5]
    ]
    data['documents_count'] = opportunity.documents.filter(user=request.user).count()

    return JsonResponse(data)


@api_view('POST')
@api_login_required
def opportunity_reorder_view(request):
    """Drag & drop: move a card to another column and/or position"""
    data = parse_json_body(request)

    missing = [key for key in ('opportunity_id', 'new_status', 'new_order') if data.get(key) is None]
    if missing:
        raise ValidationError(details={key: ['This field is required.'] for key in missing})

    opportunity = move_opportunity(
        request.user,
        data['opportunity_id'],
        data['new_status'],
        data['new_order'],
        won_date=data.get('won_date'),
        lost_reason=data.get('lost_reason'),
    )

    return JsonResponse(opportunity.to_dict())
