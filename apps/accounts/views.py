import logging

from django.conf import settings
from django.contrib.auth import authenticate, login, logout
from django.http import JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.cache import never_cache

from apps.core.decorators import api_view
from apps.core.exceptions import Unauthorized, ValidationError
from apps.core.utils import parse_json_body
from .decorators import api_login_required
from .forms import LoginForm, RegisterForm, PreferencesForm

logger = logging.getLogger(__name__)


# AUTHENTICATION VIEWS
@never_cache
@api_view('POST')
def register_view(request):
    form = RegisterForm(parse_json_body(request))

    if not form.is_valid():
        raise ValidationError.from_form(form)

    user = form.save()
    login(request, user, backend='django.contrib.auth.backends.ModelBackend')
    logger.info(f"User registered: {user.email}")

    return JsonResponse({'user': user.to_dict()}, status=201)


@never_cache
@api_view('POST')
def login_view(request):
    form = LoginForm(parse_json_body(request))

    if not form.is_valid():
        raise ValidationError.from_form(form)

    # Returns User object if valid, None if invalid or inactive
    user = authenticate(
        request,
        username=form.cleaned_data['email'],
        password=form.cleaned_data['password'],
    )

    if user is None:
        logger.warning(f"Failed login for {form.cleaned_data['email']}")
        raise Unauthorized('Invalid email or password')

    login(request, user)

    if form.cleaned_data.get('remember'):
        request.session.set_expiry(settings.SESSION_REMEMBER_AGE)
    else:
        # Session expires when browser closes
        request.session.set_expiry(0)

    return JsonResponse({'user': user.to_dict()})


@api_view('POST')
@api_login_required
def logout_view(request):
    logout(request)
    return JsonResponse({'success': True})


@ensure_csrf_cookie
@never_cache
@api_view('GET')
@api_login_required
def session_view(request):
    """Current user; also hands the front end its CSRF cookie"""
    return JsonResponse({'user': request.user.to_dict()})


# PREFERENCES VIEWS
@api_view('GET', 'PUT')
@api_login_required
def preferences_view(request):
    profile = request.user.get_profile()

    if request.method == 'PUT':
        form = PreferencesForm(parse_json_body(request))
        if not form.is_valid():
            raise ValidationError.from_form(form)
        profile = form.save(profile)

    return JsonResponse(profile.to_dict())
