"""
Global search across contacts, opportunities, communications and documents

Every hit is normalized to the same shape so the front end can render one
list:

    {'id': 12, 'type': 'contact', 'title': 'Sara Adel',
     'subtitle': 'Buyer at Acme', 'metadata': 'sara@acme.com'}

Collections are queried one after another. Each query is owner-filtered
before matching, so results never cross users.
"""
import logging

from django.conf import settings
from django.db.models import Q

from apps.communications.models import Communication
from apps.contacts.models import Contact
from apps.core.exceptions import ValidationError
from apps.core.utils import format_currency, format_file_size, time_since
from apps.documents.models import Document
from apps.opportunities.models import Opportunity

logger = logging.getLogger(__name__)

COLLECTIONS = ('contacts', 'opportunities', 'communications', 'documents')
ENTITY_TYPES = COLLECTIONS + ('all',)

# Per-collection ceiling when several collections share one limit
AGGREGATE_CAP = 10


def empty_results():
    results = {collection: [] for collection in COLLECTIONS}
    results['total'] = 0
    return results


def clean_limit(limit):
    """None -> default; anything not a positive integer is rejected; capped at the max"""
    if limit is None or limit == '':
        return settings.SEARCH_DEFAULT_LIMIT

    if isinstance(limit, bool):
        raise ValidationError(details={'limit': ['Limit must be a positive integer']})
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        raise ValidationError(details={'limit': ['Limit must be a positive integer']})

    if limit < 1:
        raise ValidationError(details={'limit': ['Limit must be a positive integer']})
    return min(limit, settings.SEARCH_MAX_LIMIT)


def clean_entity_type(entity_type):
    if not entity_type:
        return None
    if entity_type not in ENTITY_TYPES:
        raise ValidationError(details={'type': [f'Type must be one of: {", ".join(ENTITY_TYPES)}']})
    return entity_type


# COLLECTION SEARCHES
def search_contacts(user, query, take):
    contacts = Contact.objects.filter(user=user).filter(
        Q(name__icontains=query) |
        Q(email__icontains=query) |
        Q(company__icontains=query) |
        Q(title__icontains=query) |
        Q(phone__icontains=query)
    ).order_by('-updated_at')[:take]

    return [
        {
            'id': contact.id,
            'type': 'contact',
            'title': contact.name,
            'subtitle': contact.get_headline(),
            'metadata': contact.email,
        }
        for contact in contacts
    ]


def search_opportunities(user, query, take):
    opportunities = Opportunity.objects.filter(user=user).filter(
        Q(title__icontains=query) |
        Q(description__icontains=query)
    ).select_related('contact').order_by('-updated_at')[:take]

    return [
        {
            'id': opportunity.id,
            'type': 'opportunity',
            'title': opportunity.title,
            'subtitle': opportunity.get_subtitle(),
            'metadata': format_currency(opportunity.value, opportunity.currency),
        }
        for opportunity in opportunities
    ]


def search_communications(user, query, take):
    communications = Communication.objects.filter(user=user).filter(
        Q(subject__icontains=query) |
        Q(content__icontains=query)
    ).select_related('contact', 'opportunity').order_by('-created_at')[:take]

    return [
        {
            'id': communication.id,
            'type': 'communication',
            'title': communication.get_title(),
            'subtitle': communication.get_subtitle(),
            'metadata': time_since(communication.created_at),
        }
        for communication in communications
    ]


def search_documents(user, query, take):
    documents = Document.objects.filter(user=user).filter(
        Q(original_name__icontains=query) |
        Q(filename__icontains=query)
    ).select_related('contact', 'opportunity').order_by('-created_at')[:take]

    return [
        {
            'id': document.id,
            'type': 'document',
            'title': document.original_name,
            'subtitle': document.get_subtitle(),
            'metadata': format_file_size(document.size),
        }
        for document in documents
    ]


SEARCHERS = {
    'contacts': search_contacts,
    'opportunities': search_opportunities,
    'communications': search_communications,
    'documents': search_documents,
}


def search(user, query, entity_type=None, limit=None):
    """
    Search the user's data

    Args:
        query: substring, matched case-insensitively; blank returns nothing
            without touching the database
        entity_type: one collection name, 'all' or None (same as 'all')
        limit: max results for a single collection; when searching all of
            them each collection gets limit // 4 (at least 1, at most 10)

    Raises:
        ValidationError: unknown entity_type or a limit that is not a
            positive integer
    """
    entity_type = clean_entity_type(entity_type)
    limit = clean_limit(limit)

    query = (query or '').strip()
    if not query:
        return empty_results()

    if entity_type in COLLECTIONS:
        collections = [entity_type]
        take = limit
    else:
        collections = list(COLLECTIONS)
        take = max(1, min(limit // 4, AGGREGATE_CAP))

    results = empty_results()
    for collection in collections:
        results[collection] = SEARCHERS[collection](user, query, take)

    results['total'] = sum(len(results[collection]) for collection in COLLECTIONS)

    logger.debug(f"Search {query!r} ({entity_type or 'all'}) by user {user.pk}: {results['total']} results")
    return results
