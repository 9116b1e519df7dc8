from django.urls import path
from .views import (
    ReasonerListCreateAPIView,
    ReasonerDetailAPIView,
    ScenarioListCreateAPIView,
    ScenarioDetailAPIView,
)

urlpatterns = [
    path('reasoners/', ReasonerListCreateAPIView.as_view(), name='reasoner-list-create'),
    path('reasoners/<str:pk>/', ReasonerDetailAPIView.as_view(), name='reasoner-detail'),
    path('scenarios/', ScenarioListCreateAPIView.as_view(), name='scenario-list-create'),
    path('scenarios/<str:pk>/', ScenarioDetailAPIView.as_view(), name='scenario-detail'),
]
