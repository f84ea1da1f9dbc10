from django.urls import path
from . import views

app_name = 'documents'

urlpatterns = [
    path('', views.document_collection_view, name='document_list'),
    path('<int:pk>/', views.document_detail_view, name='document_detail'),
    path('<int:pk>/download/', views.document_download_view, name='document_download'),
]
