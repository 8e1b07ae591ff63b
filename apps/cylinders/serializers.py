from rest_framework import serializers
from .models import DivingCylinderSet, DivingCylinder


class DivingCylinderSerializer(serializers.ModelSerializer):
    """Single cylinder inside a set."""

    class Meta:
        model = DivingCylinder
        fields = ['id', 'volume', 'pressure', 'material', 'serial_number', 'inspection']
        read_only_fields = ['id']


class DivingCylinderSetSerializer(serializers.ModelSerializer):
    """Cylinder set with nested cylinders (read)."""

    cylinders = DivingCylinderSerializer(many=True, read_only=True)

    class Meta:
        model = DivingCylinderSet
        fields = ['id', 'owner', 'name', 'archived', 'created_at', 'cylinders']
        read_only_fields = fields


class DivingCylinderSetCreateSerializer(serializers.Serializer):
    """Input serializer for creating a cylinder set."""

    name = serializers.CharField(max_length=100)
    cylinders = DivingCylinderSerializer(many=True)

    def validate_cylinders(self, value):
        if not value:
            raise serializers.ValidationError('At least one cylinder is required')
        return value
