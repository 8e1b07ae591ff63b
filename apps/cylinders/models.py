# ==========================================
# apps/cylinders/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid


class DivingCylinderSet(models.Model):
    """A member's set of cylinders that is filled as one unit (single or twin set)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='cylinder_sets'
    )
    name = models.CharField(max_length=100)
    # Hidden from listings; toggled together with the owner's archive state
    archived = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'diving_cylinder_sets'
        indexes = [
            models.Index(fields=['owner', 'archived'], name='cylset_owner_archived_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name


class DivingCylinder(models.Model):
    """Single cylinder belonging to a set."""

    class Material(models.TextChoices):
        STEEL = 'steel', 'Steel'
        ALUMINIUM = 'aluminium', 'Aluminium'
        CARBON = 'carbon', 'Carbon fibre'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    cylinder_set = models.ForeignKey(
        DivingCylinderSet,
        on_delete=models.CASCADE,
        related_name='cylinders'
    )
    volume = models.DecimalField(
        max_digits=5,
        decimal_places=1,
        validators=[MinValueValidator(Decimal('0.1'))],
        help_text='Water volume in litres'
    )
    pressure = models.PositiveIntegerField(help_text='Working pressure in bar')
    material = models.CharField(max_length=20, choices=Material.choices)
    serial_number = models.CharField(max_length=64)
    inspection = models.DateField(null=True, blank=True, help_text='Last periodic inspection')

    class Meta:
        db_table = 'diving_cylinders'

    def __str__(self):
        return f'{self.volume} l / {self.pressure} bar ({self.serial_number})'
