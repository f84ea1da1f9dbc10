# Decorators in this file:
# 1. api_login_required - Caller must have a valid session
# ==============================================================================

from functools import wraps

from apps.core.exceptions import Unauthorized


def api_login_required(view_func):
    """
    Decorator: Only authenticated (and active) users can call this endpoint

    Unlike Django's @login_required this never redirects to a login page;
    it raises Unauthorized, which @api_view turns into a 401 JSON response.

    Usage:
    @api_view('GET')
    @api_login_required
    def contact_collection_view(request):
        ...
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated or not user.is_active:
            raise Unauthorized()
        return view_func(request, *args, **kwargs)

    return wrapper
