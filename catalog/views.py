# catalog/views.py

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .apps import get_repository
from .serializers import (
    CategoryFilterSerializer,
    ReasonerCreateSerializer,
    ReasonerSerializer,
    ScenarioCreateSerializer,
    ScenarioSerializer,
    filters_from,
)

logger = logging.getLogger(__name__)


class ReasonerListCreateAPIView(APIView):
    """
    Endpoints:
    - GET  /api/reasoners/?category=
    - POST /api/reasoners/
    """

    def get(self, request):
        query = CategoryFilterSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        reasoners = get_repository().list_reasoners(**filters_from(query))
        return Response(ReasonerSerializer(reasoners, many=True).data)

    def post(self, request):
        serializer = ReasonerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            reasoner = get_repository().create_reasoner(serializer.to_input())
            return Response(ReasonerSerializer(reasoner).data, status=status.HTTP_201_CREATED)
        except Exception as e:
            logger.error(f"Error creating reasoner: {e}", exc_info=True)
            return Response({"error": "Failed to create reasoner"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ReasonerDetailAPIView(APIView):
    """
    Endpoint: GET /api/reasoners/{pk}/
    """

    def get(self, request, pk):
        reasoner = get_repository().get_reasoner(pk)
        if reasoner is None:
            return Response({"error": "Reasoner not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(ReasonerSerializer(reasoner).data)


class ScenarioListCreateAPIView(APIView):
    """
    Endpoints:
    - GET  /api/scenarios/?category=&search=
    - POST /api/scenarios/

    A non-empty ``search`` narrows the listing to scenarios whose title,
    description or content contains it.
    """

    def get(self, request):
        query = CategoryFilterSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        repo = get_repository()
        search = query.validated_data.get('search')
        if search:
            scenarios = repo.search_scenarios(search, **filters_from(query))
        else:
            scenarios = repo.list_scenarios(**filters_from(query))
        return Response(ScenarioSerializer(scenarios, many=True).data)

    def post(self, request):
        serializer = ScenarioCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            scenario = get_repository().create_scenario(serializer.to_input())
            return Response(ScenarioSerializer(scenario).data, status=status.HTTP_201_CREATED)
        except Exception as e:
            logger.error(f"Error creating scenario: {e}", exc_info=True)
            return Response({"error": "Failed to create scenario"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ScenarioDetailAPIView(APIView):
    """
    Endpoint: GET /api/scenarios/{pk}/
    """

    def get(self, request, pk):
        scenario = get_repository().get_scenario(pk)
        if scenario is None:
            return Response({"error": "Scenario not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(ScenarioSerializer(scenario).data)
