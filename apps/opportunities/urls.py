from django.urls import path
from . import views

app_name = 'opportunities'

urlpatterns = [
    path('', views.opportunity_collection_view, name='opportunity_list'),
    path('reorder/', views.opportunity_reorder_view, name='opportunity_reorder'),
    path('<int:pk>/', views.opportunity_detail_view, name='opportunity_detail'),
]
