from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from uuid import UUID
from .serializers import DivingCylinderSetSerializer, DivingCylinderSetCreateSerializer
from .services import (
    get_user_cylinder_sets,
    create_cylinder_set,
    archive_cylinder_set,
    CylinderSetNotFoundError,
    InvalidCylinderSetError,
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    methods=['GET'],
    responses={200: DivingCylinderSetSerializer(many=True)},
    description="List the current user's cylinder sets (archived sets are hidden).",
    tags=['cylinder-sets'],
)
@extend_schema(
    methods=['POST'],
    request=DivingCylinderSetCreateSerializer,
    responses={
        201: DivingCylinderSetSerializer,
        400: ErrorResponseSerializer,
    },
    description="Create a cylinder set for the current user.",
    tags=['cylinder-sets'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def cylinder_sets(request):
    """List or create the current user's cylinder sets."""
    if request.method == 'GET':
        sets = get_user_cylinder_sets(user=request.user)
        return Response(DivingCylinderSetSerializer(sets, many=True).data)

    serializer = DivingCylinderSetCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        cylinder_set = create_cylinder_set(owner=request.user, **serializer.validated_data)
    except InvalidCylinderSetError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(
        DivingCylinderSetSerializer(cylinder_set).data,
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    request=None,
    responses={
        200: DivingCylinderSetSerializer,
        404: ErrorResponseSerializer,
    },
    description="Archive one of the current user's cylinder sets.",
    tags=['cylinder-sets'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def archive_set(request, cylinder_set_id: UUID):
    """Archive a cylinder set owned by the current user."""
    try:
        cylinder_set = archive_cylinder_set(
            cylinder_set_id=cylinder_set_id,
            user=request.user
        )
    except CylinderSetNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(DivingCylinderSetSerializer(cylinder_set).data)
