# ==========================================
# apps/fills/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid


class PaymentStatus(models.TextChoices):
    CREATED = 'CREATED', 'Created'
    COMPLETED = 'COMPLETED', 'Completed'
    FAILED = 'FAILED', 'Failed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class FillEvent(models.Model):
    """One gas fill logged at the station. Price is fixed when the fill is logged."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='fill_events'
    )
    cylinder_set = models.ForeignKey(
        'cylinders.DivingCylinderSet',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='fill_events'
    )
    gas_mixture = models.CharField(max_length=50)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'fill_events'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='fill_user_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f'{self.gas_mixture} fill for {self.user_id} ({self.price})'


class PaymentEvent(models.Model):
    """Invoice payment covering one or more fill events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='payment_events'
    )
    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.CREATED
    )
    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    fill_events = models.ManyToManyField(
        FillEvent,
        through='FillEventPaymentEvent',
        related_name='payment_events'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_events'
        ordering = ['-created_at']

    def __str__(self):
        return f'Payment {self.id} ({self.status})'


class FillEventPaymentEvent(models.Model):
    """Link between a fill event and a payment attempt for it."""

    fill_event = models.ForeignKey(
        FillEvent,
        on_delete=models.CASCADE,
        related_name='payment_links'
    )
    payment_event = models.ForeignKey(
        PaymentEvent,
        on_delete=models.CASCADE,
        related_name='fill_event_links'
    )

    class Meta:
        db_table = 'fill_event_payment_events'
        constraints = [
            models.UniqueConstraint(
                fields=['fill_event', 'payment_event'],
                name='unique_fill_event_payment_event'
            ),
        ]
