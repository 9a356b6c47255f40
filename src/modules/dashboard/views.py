"""Dashboard API view."""

from __future__ import annotations

from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.dashboard.repositories.django_repository import DashboardDjangoRepository
from modules.dashboard.services import DashboardService


class DashboardView(APIView):
    """GET /api/v1/dashboard/ : the caller's portfolio summary."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DashboardService(repository=DashboardDjangoRepository())

    def get(self, request: Request) -> Response:
        stats = self._service.get_stats(request.user.pk)
        return Response(stats.model_dump(mode="json"))
