from datetime import timedelta

from django.db.models import Count, Q, Sum
from django.http import JsonResponse
from django.utils import timezone

from apps.accounts.decorators import api_login_required
from apps.communications.models import Communication
from apps.contacts.models import Contact
from apps.opportunities.models import Opportunity, OpportunityStatus
from .decorators import api_view
from .utils import decimal_to_float, format_currency, isoformat


@api_view('GET')
@api_login_required
def dashboard_view(request):
    """
    Main dashboard
    - key counts and pipeline value
    - what is scheduled for the next 7 days
    - recent contacts and opportunities
    """
    user = request.user
    now = timezone.now()
    today = timezone.localdate()

    contacts_qs = Contact.objects.filter(user=user)
    opportunities_qs = Opportunity.objects.filter(user=user)
    communications_qs = Communication.objects.filter(user=user)

    # 1. Key Metrics
    start_of_week = today - timedelta(days=today.weekday())
    closed = OpportunityStatus.closed()

    opportunity_totals = opportunities_qs.aggregate(
        total=Count('id'),
        active=Count('id', filter=~Q(status__in=closed)),
        pipeline_value=Sum('value', filter=~Q(status__in=closed)),
        won_value=Sum('value', filter=Q(status=OpportunityStatus.CLOSED_WON)),
    )

    pipeline_value = decimal_to_float(opportunity_totals['pipeline_value']) or 0

    metrics = {
        'total_contacts': contacts_qs.count(),
        'new_contacts_this_week': contacts_qs.filter(created_at__date__gte=start_of_week).count(),
        'total_opportunities': opportunity_totals['total'],
        'active_opportunities': opportunity_totals['active'],
        'pipeline_value': pipeline_value,
        'formatted_pipeline_value': format_currency(pipeline_value),
        'won_value': decimal_to_float(opportunity_totals['won_value']) or 0,
    }

    # 2. Upcoming (scheduled in the next 7 days, not completed yet)
    upcoming = communications_qs.filter(
        scheduled_date__gte=now,
        scheduled_date__lte=now + timedelta(days=7),
        completed_date__isnull=True,
    ).select_related('contact', 'opportunity').order_by('scheduled_date')

    metrics['upcoming_communications'] = upcoming.count()

    # 3. Overdue (scheduled in the past, never completed)
    metrics['overdue_communications'] = communications_qs.filter(
        scheduled_date__lt=now,
        completed_date__isnull=True,
    ).count()

    # 4. Recent Activity
    recent_contacts = contacts_qs.order_by('-created_at')[:5]
    recent_opportunities = opportunities_qs.select_related('contact').order_by('-created_at')[:5]

    # 5. Daily Trends (Last 7 days)
    seven_days_ago = today - timedelta(days=6)
    daily_counts = communications_qs.filter(created_at__date__gte=seven_days_ago)\
        .values('created_at__date')\
        .annotate(count=Count('id'))\
        .order_by()

    daily_map = {item['created_at__date']: item['count'] for item in daily_counts}

    last_7_days = []
    for i in range(6, -1, -1):
        day = today - timedelta(days=i)
        last_7_days.append({
            'date': day.strftime('%Y-%m-%d'),
            'date_label': day.strftime('%d %b'),
            'count': daily_map.get(day, 0),
        })

    return JsonResponse({
        'metrics': metrics,
        'upcoming': [communication.to_dict() for communication in upcoming[:10]],
        'recent_contacts': [
            {
                'id': contact.id,
                'name': contact.name,
                'company': contact.company,
                'initials': contact.get_initials(),
                'created_at': isoformat(contact.created_at),
            }
            for contact in recent_contacts
        ],
        'recent_opportunities': [
            {
                'id': opportunity.id,
                'title': opportunity.title,
                'status': opportunity.status,
                'value': decimal_to_float(opportunity.value),
                'formatted_value': opportunity.get_formatted_value(),
                'contact': opportunity.contact.to_summary() if opportunity.contact else None,
                'created_at': isoformat(opportunity.created_at),
            }
            for opportunity in recent_opportunities
        ],
        'communications_last_7_days': last_7_days,
    })
