from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.role import Role
from taskpilot.dto.responses.dashboard_response import DashboardStatsResponse
from taskpilot.services.dashboard_service import DashboardService
from taskpilot.services.permission_service import role_required


class DashboardStatsView(APIView):
    @extend_schema(
        operation_id="get_dashboard_stats",
        summary="Project, task and member totals",
        tags=["dashboard"],
        responses={
            200: OpenApiResponse(response=DashboardStatsResponse, description="Dashboard statistics"),
            403: OpenApiResponse(description="Caller is not an Admin or Manager"),
        },
    )
    @role_required(Role.ADMIN, Role.MANAGER)
    def get(self, request: Request):
        stats = DashboardService.get_stats()
        # by_alias keeps the aggregation's `_id` key in the breakdown.
        return Response(data=stats.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)
