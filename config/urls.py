from django.contrib import admin
from django.urls import path, include

# Main URL Configuration
# Routes all API requests to the owning app

urlpatterns = [

    path('admin/', admin.site.urls),
    path('api/', include('apps.accounts.urls')),
    path('api/dashboard/', include('apps.core.urls')),
    path('api/contacts/', include('apps.contacts.urls')),
    path('api/opportunities/', include('apps.opportunities.urls')),
    path('api/communications/', include('apps.communications.urls')),
    path('api/documents/', include('apps.documents.urls')),
    path('api/search/', include('apps.search.urls')),

]
