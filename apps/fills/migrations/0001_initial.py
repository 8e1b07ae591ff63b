import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('cylinders', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FillEvent',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('gas_mixture', models.CharField(max_length=50)),
                ('description', models.TextField(blank=True)),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('cylinder_set', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='fill_events', to='cylinders.divingcylinderset')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='fill_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'fill_events',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['user', 'created_at'], name='fill_user_created_idx')],
            },
        ),
        migrations.CreateModel(
            name='PaymentEvent',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('CREATED', 'Created'), ('COMPLETED', 'Completed'), ('FAILED', 'Failed'), ('CANCELLED', 'Cancelled')], default='CREATED', max_length=20)),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payment_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'payment_events',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='FillEventPaymentEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('fill_event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payment_links', to='fills.fillevent')),
                ('payment_event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='fill_event_links', to='fills.paymentevent')),
            ],
            options={
                'db_table': 'fill_event_payment_events',
            },
        ),
        migrations.AddField(
            model_name='paymentevent',
            name='fill_events',
            field=models.ManyToManyField(related_name='payment_events', through='fills.FillEventPaymentEvent', to='fills.fillevent'),
        ),
        migrations.AddConstraint(
            model_name='filleventpaymentevent',
            constraint=models.UniqueConstraint(fields=('fill_event', 'payment_event'), name='unique_fill_event_payment_event'),
        ),
    ]
