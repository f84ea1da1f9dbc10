from django.urls import path
from . import views

app_name = 'communications'

urlpatterns = [
    path('', views.communication_collection_view, name='communication_list'),
    path('<int:pk>/', views.communication_detail_view, name='communication_detail'),
]
