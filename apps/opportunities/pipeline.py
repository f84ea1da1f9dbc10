"""
Pipeline stage manager

Groups a user's opportunities into kanban columns, moves cards between
columns, and computes the board's summary numbers.

    list_kanban(user, ...)         -> {status: [Opportunity, ...]} in board order
    move_opportunity(user, ...)    -> the moved Opportunity
    compute_stats(user)            -> dict of totals, win rate and conversion counts

Moves are last-write-wins: two moves of the same card that race each other
both succeed and the later commit decides the final column and order.
"""
import logging
from datetime import datetime

from django.db import transaction
from django.db.models import Q, Sum, Count
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.core.exceptions import ValidationError
from apps.core.utils import get_owned_object, decimal_to_float
from .models import Opportunity, OpportunityStatus

logger = logging.getLogger(__name__)


def list_kanban(user, query=None, status=None, contact=None):
    """
    The user's opportunities partitioned by status

    Every status gets a column, even an empty one, and each opportunity lands
    in exactly one column. Inside a column cards are ordered by stage_order,
    then most recently updated first.
    """
    opportunities = Opportunity.objects.filter(user=user)

    if query:
        opportunities = opportunities.filter(
            Q(title__icontains=query) |
            Q(description__icontains=query)
        )

    if status:
        opportunities = opportunities.filter(status=status)

    if contact:
        opportunities = opportunities.filter(contact=contact)

    opportunities = opportunities.select_related('contact').prefetch_related('tags').order_by(
        'status', 'stage_order', '-updated_at'
    )

    columns = {choice.value: [] for choice in OpportunityStatus}
    for opportunity in opportunities:
        columns[opportunity.status].append(opportunity)

    return columns


def _parse_won_date(value):
    if value is None or isinstance(value, datetime):
        return value

    parsed = parse_datetime(value) if isinstance(value, str) else None
    if parsed is None:
        raise ValidationError(details={'won_date': ['Enter a valid date/time.']})
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def move_opportunity(user, opportunity_id, new_status, new_order, won_date=None, lost_reason=None):
    """
    Move a card to (new_status, new_order)

    The caller supplies the target order; other cards in the column are not
    renumbered. Entering closed-won stamps won_date (given or now) and forces
    probability to 100; entering closed-lost records lost_reason (given or
    'Not specified') and forces probability to 0.

    Raises:
        ValidationError: unknown status, order not an integer >= 0, bad won_date
        NotFound: opportunity missing or owned by someone else
    """
    try:
        status = OpportunityStatus(new_status)
    except ValueError:
        raise ValidationError(details={'new_status': ['Invalid status']})

    if isinstance(new_order, bool) or not isinstance(new_order, int) or new_order < 0:
        raise ValidationError(details={'new_order': ['Order must be a non-negative integer']})

    won_date = _parse_won_date(won_date)

    with transaction.atomic():
        opportunity = get_owned_object(
            Opportunity.objects.select_for_update(), user, opportunity_id, label='Opportunity'
        )
        old_status = opportunity.status

        opportunity.status = status.value
        opportunity.stage_order = new_order

        if status == OpportunityStatus.CLOSED_WON:
            status.apply_to(opportunity, won_date=won_date or timezone.now())
        elif status == OpportunityStatus.CLOSED_LOST:
            status.apply_to(opportunity, lost_reason=lost_reason or 'Not specified')

        opportunity.save()

    logger.info(
        f"Opportunity {opportunity.pk} moved from {old_status} to {status.value} "
        f"(order {new_order}) by user {user.pk}"
    )
    return opportunity


def compute_stats(user):
    """
    Summary numbers over ALL of the user's opportunities

    Board filters never change these. Opportunities without a value count
    as 0 in every sum.
    """
    closed = OpportunityStatus.closed()

    totals = Opportunity.objects.filter(user=user).aggregate(
        total=Count('id'),
        total_value=Sum('value'),
        pipeline_value=Sum('value', filter=~Q(status__in=closed)),
        won_value=Sum('value', filter=Q(status=OpportunityStatus.CLOSED_WON)),
        won=Count('id', filter=Q(status=OpportunityStatus.CLOSED_WON)),
        lost=Count('id', filter=Q(status=OpportunityStatus.CLOSED_LOST)),
    )

    total = totals['total']
    won = totals['won']
    lost = totals['lost']
    total_value = decimal_to_float(totals['total_value']) or 0

    win_rate = round(100 * won / (won + lost), 2) if (won + lost) else 0
    avg_value = round(total_value / total, 2) if total else 0

    return {
        'total': total,
        'total_value': total_value,
        'pipeline_value': decimal_to_float(totals['pipeline_value']) or 0,
        'won_value': decimal_to_float(totals['won_value']) or 0,
        'win_rate': win_rate,
        'avg_value': avg_value,
        'conversion_stats': {
            'won': won,
            'lost': lost,
            'active': total - won - lost,
        },
    }
