from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [

    path('auth/register/', views.register_view, name='register'),
    path('auth/login/', views.login_view, name='login'),
    path('auth/logout/', views.logout_view, name='logout'),
    path('auth/session/', views.session_view, name='session'),
    path('user/preferences/', views.preferences_view, name='preferences'),
]
