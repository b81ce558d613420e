from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.constants.role import Role
from taskpilot.dto.contact_dto import ContactDTO
from taskpilot.dto.responses.message_response import MessageResponse
from taskpilot.serializers.contact_serializer import ContactSerializer, ContactStatusSerializer
from taskpilot.services.contact_service import ContactService
from taskpilot.services.permission_service import role_required

CONTACT_ID_PARAMETER = OpenApiParameter(
    name="contact_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the contact message",
)


class ContactView(APIView):
    @extend_schema(
        operation_id="submit_contact_form",
        summary="Submit the public contact form",
        description="Every Admin is notified of the submission.",
        tags=["contact"],
        request=ContactSerializer,
        responses={
            201: OpenApiResponse(response=MessageResponse, description="Message received"),
            400: OpenApiResponse(description="A required field is missing"),
        },
    )
    def post(self, request: Request):
        serializer = ContactSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ContactService.submit(**serializer.validated_data)
        return Response(
            data=MessageResponse(message=AppMessages.CONTACT_SUBMITTED).model_dump(mode="json"),
            status=status.HTTP_201_CREATED,
        )


class ContactAdminListView(APIView):
    @extend_schema(
        operation_id="get_contacts",
        summary="All contact messages",
        description="Newest first. Admins only.",
        tags=["contact"],
        responses={
            200: OpenApiResponse(response=ContactDTO, description="Contact messages"),
            403: OpenApiResponse(description="Caller is not an Admin"),
        },
    )
    @role_required(Role.ADMIN)
    def get(self, request: Request):
        contacts = ContactService.list_contacts()
        return Response(data=[contact.model_dump(mode="json") for contact in contacts], status=status.HTTP_200_OK)


class ContactAdminDetailView(APIView):
    @extend_schema(
        operation_id="get_contact_by_id",
        summary="Get a contact message",
        tags=["contact"],
        parameters=[CONTACT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=ContactDTO, description="Contact message"),
            403: OpenApiResponse(description="Caller is not an Admin"),
            404: OpenApiResponse(description="Contact message not found"),
        },
    )
    @role_required(Role.ADMIN)
    def get(self, request: Request, contact_id: str):
        contact = ContactService.get_contact(contact_id)
        return Response(data=contact.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_contact",
        summary="Delete a contact message",
        tags=["contact"],
        parameters=[CONTACT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Contact message deleted"),
            403: OpenApiResponse(description="Caller is not an Admin"),
            404: OpenApiResponse(description="Contact message not found"),
        },
    )
    @role_required(Role.ADMIN)
    def delete(self, request: Request, contact_id: str):
        ContactService.delete_contact(contact_id)
        return Response(
            data=MessageResponse(message=AppMessages.CONTACT_DELETED).model_dump(mode="json"),
            status=status.HTTP_200_OK,
        )


class ContactAdminStatusView(APIView):
    @extend_schema(
        operation_id="update_contact_status",
        summary="Change the status of a contact message",
        tags=["contact"],
        parameters=[CONTACT_ID_PARAMETER],
        request=ContactStatusSerializer,
        responses={
            200: OpenApiResponse(response=ContactDTO, description="Status updated"),
            400: OpenApiResponse(description="Unknown status"),
            403: OpenApiResponse(description="Caller is not an Admin"),
            404: OpenApiResponse(description="Contact message not found"),
        },
    )
    @role_required(Role.ADMIN)
    def patch(self, request: Request, contact_id: str):
        serializer = ContactStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        contact = ContactService.update_status(contact_id, serializer.validated_data["status"])
        return Response(
            data={"message": AppMessages.CONTACT_STATUS_UPDATED, "contact": contact.model_dump(mode="json")},
            status=status.HTTP_200_OK,
        )
