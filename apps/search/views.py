from django.http import JsonResponse

from apps.accounts.decorators import api_login_required
from apps.core.decorators import api_view
from .search import search


@api_view('GET')
@api_login_required
def search_view(request):
    """GET /api/search/?query=acme&type=contacts&limit=20"""
    results = search(
        request.user,
        request.GET.get('query', ''),
        entity_type=request.GET.get('type'),
        limit=request.GET.get('limit'),
    )
    return JsonResponse(results)
