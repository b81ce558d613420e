from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.dto.notification_dto import NotificationDTO
from taskpilot.dto.responses.message_response import MessageResponse
from taskpilot.services.notification_service import NotificationService

NOTIFICATION_ID_PARAMETER = OpenApiParameter(
    name="notification_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the notification",
)


def _clear_notifications(request: Request) -> Response:
    NotificationService.clear_notifications(request.user_id)
    return Response(
        data=MessageResponse(message=AppMessages.NOTIFICATIONS_CLEARED).model_dump(mode="json"),
        status=status.HTTP_200_OK,
    )


class NotificationListView(APIView):
    @extend_schema(
        operation_id="get_notifications",
        summary="The caller's latest notifications",
        description="At most 50, newest first, with the sender expanded.",
        tags=["notifications"],
        responses={200: OpenApiResponse(response=NotificationDTO, description="Notifications")},
    )
    def get(self, request: Request):
        notifications = NotificationService.list_notifications(request.user_id)
        return Response(data=[n.model_dump(mode="json") for n in notifications], status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_all_notifications",
        summary="Delete all of the caller's notifications",
        tags=["notifications"],
        responses={200: OpenApiResponse(response=MessageResponse, description="Notifications cleared")},
    )
    def delete(self, request: Request):
        return _clear_notifications(request)


class NotificationClearAllView(APIView):
    @extend_schema(
        operation_id="clear_all_notifications",
        summary="Delete all of the caller's notifications",
        tags=["notifications"],
        responses={200: OpenApiResponse(response=MessageResponse, description="Notifications cleared")},
    )
    def delete(self, request: Request):
        return _clear_notifications(request)


class NotificationMarkAllReadView(APIView):
    @extend_schema(
        operation_id="mark_all_notifications_read",
        summary="Mark every notification as read",
        tags=["notifications"],
        responses={200: OpenApiResponse(response=MessageResponse, description="Notifications marked as read")},
    )
    def patch(self, request: Request):
        NotificationService.mark_all_as_read(request.user_id)
        return Response(
            data=MessageResponse(message=AppMessages.NOTIFICATIONS_MARKED_READ).model_dump(mode="json"),
            status=status.HTTP_200_OK,
        )


class NotificationUnreadCountView(APIView):
    @extend_schema(
        operation_id="get_notification_unread_count",
        summary="Number of unread notifications",
        tags=["notifications"],
        responses={200: OpenApiResponse(description="`{count}`")},
    )
    def get(self, request: Request):
        return Response(
            data={"count": NotificationService.get_unread_count(request.user_id)}, status=status.HTTP_200_OK
        )


class NotificationReadView(APIView):
    @extend_schema(
        operation_id="mark_notification_read",
        summary="Mark one notification as read",
        tags=["notifications"],
        parameters=[NOTIFICATION_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=NotificationDTO, description="Notification marked as read"),
            404: OpenApiResponse(description="Notification not found for this recipient"),
        },
    )
    def patch(self, request: Request, notification_id: str):
        notification = NotificationService.mark_as_read(notification_id, request.user_id)
        return Response(data=notification.model_dump(mode="json"), status=status.HTTP_200_OK)


class NotificationDetailView(APIView):
    @extend_schema(
        operation_id="delete_notification",
        summary="Delete one notification",
        tags=["notifications"],
        parameters=[NOTIFICATION_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Notification deleted"),
            404: OpenApiResponse(description="Notification not found for this recipient"),
        },
    )
    def delete(self, request: Request, notification_id: str):
        NotificationService.delete_notification(notification_id, request.user_id)
        return Response(
            data=MessageResponse(message=AppMessages.NOTIFICATION_DELETED).model_dump(mode="json"),
            status=status.HTTP_200_OK,
        )
