from django.urls import path
from . import views

app_name = 'contacts'

urlpatterns = [
    path('', views.contact_collection_view, name='contact_list'),
    path('export/', views.contact_export_view, name='contact_export'),
    path('<int:pk>/', views.contact_detail_view, name='contact_detail'),
]
