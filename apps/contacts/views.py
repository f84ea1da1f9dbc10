import csv
import logging

import openpyxl
from openpyxl.styles import Font, PatternFill
from django.db.models import Q, Count
from django.http import JsonResponse, HttpResponse
from django.utils import timezone

from apps.accounts.decorators import api_login_required
from apps.core.decorators import api_view
from apps.core.exceptions import ValidationError
from apps.core.utils import (
    bind_partial, get_owned_object, paginate, parse_json_body, parse_tag_list, decimal_to_float, isoformat,
)
from .forms import ContactForm, ContactFilterForm
from .models import Contact

logger = logging.getLogger(__name__)

EXPORT_HEADERS = ['ID', 'Name', 'Email', 'Phone', 'Company', 'Title', 'Website', 'Tags', 'Created Date']


def filter_contacts(request):
    """Caller's contacts narrowed by ?query=&company=&tag="""
    contacts = Contact.objects.filter(user=request.user)

    filter_form = ContactFilterForm(request.GET)
    if filter_form.is_valid():
        query = filter_form.cleaned_data.get('query', '').strip()
        if query:
            contacts = contacts.filter(
                Q(name__icontains=query) |
                Q(email__icontains=query) |
                Q(company__icontains=query)
            )

        if filter_form.cleaned_data.get('company'):
            contacts = contacts.filter(company__icontains=filter_form.cleaned_data['company'].strip())

        if filter_form.cleaned_data.get('tag'):
            contacts = contacts.filter(tags__name__iexact=filter_form.cleaned_data['tag'].strip()).distinct()

    return contacts.order_by('-updated_at')


def save_contact(form, user, tags):
    contact = form.save(commit=False)
    contact.user = user
    contact.save()
    if tags is not None:
        contact.tags.set(tags)
    return contact


@api_view('GET', 'POST')
@api_login_required
def contact_collection_view(request):
    if request.method == 'POST':
        data = parse_json_body(request)
        tags = parse_tag_list(data.get('tags'))
        form = ContactForm(data)

        if not form.is_valid():
            raise ValidationError.from_form(form)

        contact = save_contact(form, request.user, tags)
        return JsonResponse(contact.to_dict(), status=201)

    contacts = filter_contacts(request).annotate(
        opportunities_count=Count('opportunities', distinct=True),
        communications_count=Count('communications', distinct=True),
        documents_count=Count('documents', distinct=True),
    ).prefetch_related('tags')

    page_obj, pagination = paginate(request, contacts)

    contacts_data = []
    for contact in page_obj:
        data = contact.to_dict()
        data['counts'] = {
            'opportunities': contact.opportunities_count,
            'communications': contact.communications_count,
            'documents': contact.documents_count,
        }
        contacts_data.append(data)

    return JsonResponse({
        'contacts': contacts_data,
        'pagination': pagination,
    })


@api_view('GET', 'PUT', 'DELETE')
@api_login_required
def contact_detail_view(request, pk):
    contact = get_owned_object(Contact, request.user, pk, label='Contact')

    if request.method == 'PUT':
        data = parse_json_body(request)
        tags = parse_tag_list(data['tags']) if 'tags' in data else None
        form = bind_partial(ContactForm, contact, data)

        if not form.is_valid():
            raise ValidationError.from_form(form)

        contact = save_contact(form, request.user, tags)
        return JsonResponse(contact.to_dict())

    if request.method == 'DELETE':
        contact_name = contact.name
        contact.delete()
        logger.info(f"Contact {pk} ({contact_name}) deleted by user {request.user.pk}")
        return JsonResponse({'message': 'Contact deleted successfully'})

    data = contact.to_dict()
    data['opportunities'] = [
        {
            'id': opportunity.id,
            'title': opportunity.title,
            'value': decimal_to_float(opportunity.value),
            'currency': opportunity.currency,
            'status': opportunity.status,
        }
        for opportunity in contact.opportunities.filter(user=request.user).order_by('status', 'stage_order')
    ]
    data['communications'] = [
        {
            'id': communication.id,
            'type': communication.type,
            'subject': communication.subject,
            'created_at': isoformat(communication.created_at),
        }
        for communication in contact.communications.filter(user=request.user).order_by('-created_at')[:5]
    ]
    data['documents_count'] = contact.documents.filter(user=request.user).count()

    return JsonResponse(data)


@api_view('GET')
@api_login_required
def contact_export_view(request):
    export_format = request.GET.get('format', 'excel')
    contacts = filter_contacts(request).prefetch_related('tags')
    timestamp = timezone.now().strftime("%Y%m%d_%H%M%S")

    def export_row(contact):
        return [
            contact.id,
            contact.name,
            contact.email or '',
            contact.phone or '',
            contact.company or '',
            contact.title or '',
            contact.website or '',
            ', '.join(sorted(tag.name for tag in contact.tags.all())),
            contact.created_at.strftime('%Y-%m-%d %H:%M'),
        ]

    if export_format == 'excel':
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Contacts"

        # Write headers with styling
        for col, header in enumerate(EXPORT_HEADERS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color="667eea", end_color="667eea", fill_type="solid")

        for row, contact in enumerate(contacts, start=2):
            for col, value in enumerate(export_row(contact), start=1):
                ws.cell(row=row, column=col, value=value)

        # Adjust column widths
        for col in ws.columns:
            max_length = max(len(str(cell.value or '')) for cell in col)
            ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

        response = HttpResponse(
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        response['Content-Disposition'] = f'attachment; filename="contacts_{timestamp}.xlsx"'
        wb.save(response)
        return response

    elif export_format == 'csv':
        response = HttpResponse(content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="contacts_{timestamp}.csv"'

        # Write BOM for Excel UTF-8 compatibility
        response.write('﻿')

        writer = csv.writer(response)
        writer.writerow(EXPORT_HEADERS)
        for contact in contacts:
            writer.writerow(export_row(contact))

        return response

    raise ValidationError('Invalid export format', details={'format': ['Use "excel" or "csv"']})
