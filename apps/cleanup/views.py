from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from uuid import UUID
from .serializers import (
    ArchivedUserSerializer,
    MessageResponseSerializer,
    ErrorResponseSerializer,
)
from .services import (
    get_archived_users_with_details,
    unarchive_user,
    ArchivedUserNotFoundError,
)


@extend_schema(
    responses={200: ArchivedUserSerializer(many=True)},
    description="Fetch all archived users that are not yet anonymized, most recently archived first.",
    tags=['archived-users'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def archived_users(request):
    """List archived users (admin only)."""
    users = get_archived_users_with_details()
    return Response(ArchivedUserSerializer(users, many=True).data)


@extend_schema(
    request=None,
    responses={
        200: MessageResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Unarchive a user and restore their cylinder sets.",
    tags=['archived-users'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
def unarchive(request, user_id: UUID):
    """Unarchive a user (admin only)."""
    try:
        unarchive_user(user_id=user_id, performed_by_user_id=request.user.id)
    except ArchivedUserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response({'message': 'User successfully unarchived'})
