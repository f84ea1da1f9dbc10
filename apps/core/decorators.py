# Decorators in this file:
# 1. api_view - HTTP method check + error translation for JSON endpoints
#
# Stack it outermost, before @api_login_required:
#
#     @api_view('GET', 'POST')
#     @api_login_required
#     def contact_collection_view(request):
#         ...
# ==============================================================================

import logging
from functools import wraps

from django.http import JsonResponse

from .exceptions import CRMError

logger = logging.getLogger(__name__)


def api_view(*methods):
    """
    Decorator: JSON endpoint

    1. Rejects methods not listed with 405
    2. Maps CRMError subclasses to their status code
    3. Logs anything else and answers with a 500 JSON body
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if methods and request.method not in methods:
                response = JsonResponse({'error': 'Method not allowed'}, status=405)
                response['Allow'] = ', '.join(methods)
                return response

            try:
                return view_func(request, *args, **kwargs)

            except CRMError as e:
                if e.status_code >= 500:
                    logger.error(f"{view_func.__name__} failed: {e.message}")
                return JsonResponse(e.as_dict(), status=e.status_code)

            except Exception:
                logger.exception(f"Unexpected error in {view_func.__name__}")
                return JsonResponse({'error': 'Internal server error'}, status=500)

        return wrapper

    return decorator
