from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.health import AppHealthStatus, ComponentHealthStatus
from taskpilot_project.db.config import DatabaseManager


def _component(is_up: bool) -> dict:
    return {"status": (ComponentHealthStatus.UP if is_up else ComponentHealthStatus.DOWN).value}


class HealthView(APIView):
    @extend_schema(
        operation_id="health_check",
        summary="Liveness of the API and its MongoDB connection",
        description="Public. Pings MongoDB; any failure marks the whole service DOWN.",
        tags=["health"],
        responses={
            200: OpenApiResponse(description="Service and MongoDB are UP"),
            503: OpenApiResponse(description="MongoDB did not answer the ping"),
        },
    )
    def get(self, request: Request):
        mongo_up = DatabaseManager().check_database_health()
        overall = AppHealthStatus.UP if mongo_up else AppHealthStatus.DOWN
        return Response(
            data={"status": overall.name, "components": {"mongodb": _component(mongo_up)}},
            status=overall.http_status,
        )
