import logging
from datetime import timedelta

from django.db.models import Q, Sum
from django.http import JsonResponse, FileResponse
from django.utils import timezone

from apps.accounts.decorators import api_login_required
from apps.core.decorators import api_view
from apps.core.exceptions import ValidationError
from apps.core.utils import get_owned_object, paginate
from . import storage
from .forms import DocumentUploadForm, DocumentFilterForm
from .models import Document

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


def get_document_stats(user):
    documents = Document.objects.filter(user=user)
    week_ago = timezone.now() - timedelta(days=7)

    return {
        'total': documents.count(),
        'recent': documents.filter(created_at__gte=week_ago).count(),
        'total_size': documents.aggregate(total=Sum('size'))['total'] or 0,
    }


@api_view('GET', 'POST')
@api_login_required
def document_collection_view(request):
    """
    GET:  list with ?contact=&opportunity=&query= filters
    POST: multipart upload (file, optional contact / opportunity)
    """
    if request.method == 'POST':
        form = DocumentUploadForm(request.POST, request.FILES, user=request.user)

        if not form.is_valid():
            raise ValidationError.from_form(form)

        uploaded = form.cleaned_data['file']

        # The file is written first; a failed insert leaves it orphaned
        filename, upload_path = storage.save_file(request.user, uploaded)

        document = Document.objects.create(
            user=request.user,
            contact=form.cleaned_data.get('contact'),
            opportunity=form.cleaned_data.get('opportunity'),
            filename=filename,
            original_name=uploaded.name,
            mime_type=uploaded.content_type or 'application/octet-stream',
            size=uploaded.size,
            upload_path=upload_path,
        )

        logger.info(f"Document {document.pk} ({document.original_name}, {document.size} bytes) uploaded by user {request.user.pk}")
        return JsonResponse(document.to_dict(), status=201)

    filter_form = DocumentFilterForm(request.GET)
    if not filter_form.is_valid():
        raise ValidationError.from_form(filter_form)

    documents = Document.objects.filter(user=request.user)

    if filter_form.cleaned_data.get('contact'):
        documents = documents.filter(contact_id=filter_form.cleaned_data['contact'])

    if filter_form.cleaned_data.get('opportunity'):
        documents = documents.filter(opportunity_id=filter_form.cleaned_data['opportunity'])

    query = filter_form.cleaned_data.get('query', '').strip()
    if query:
        documents = documents.filter(
            Q(original_name__icontains=query) |
            Q(filename__icontains=query)
        )

    documents = documents.select_related('contact', 'opportunity').order_by('-created_at')
    page_obj, pagination = paginate(request, documents, default_limit=DEFAULT_LIMIT)

    return JsonResponse({
        'documents': [document.to_dict() for document in page_obj],
        'pagination': pagination,
        'stats': get_document_stats(request.user),
    })


@api_view('GET', 'DELETE')
@api_login_required
def document_detail_view(request, pk):
    document = get_owned_object(
        Document.objects.select_related('contact', 'opportunity'), request.user, pk, label='Document'
    )

    if request.method == 'DELETE':
        # File first, then the row
        storage.delete_file(document.upload_path)
        document.delete()

        logger.info(f"Document {pk} ({document.original_name}) deleted by user {request.user.pk}")
        return JsonResponse({'message': 'Document deleted successfully'})

    return JsonResponse(document.to_dict())


@api_view('GET')
@api_login_required
def document_download_view(request, pk):
    document = get_owned_object(Document, request.user, pk, label='Document')
    stored = storage.open_file(document.upload_path)

    return FileResponse(
        stored,
        as_attachment=True,
        filename=document.original_name,
        content_type=document.mime_type,
    )
