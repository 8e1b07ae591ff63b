import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DivingCylinderSet',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('archived', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cylinder_sets', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'diving_cylinder_sets',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['owner', 'archived'], name='cylset_owner_archived_idx')],
            },
        ),
        migrations.CreateModel(
            name='DivingCylinder',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('volume', models.DecimalField(decimal_places=1, help_text='Water volume in litres', max_digits=5, validators=[MinValueValidator(Decimal('0.1'))])),
                ('pressure', models.PositiveIntegerField(help_text='Working pressure in bar')),
                ('material', models.CharField(choices=[('steel', 'Steel'), ('aluminium', 'Aluminium'), ('carbon', 'Carbon fibre')], max_length=20)),
                ('serial_number', models.CharField(max_length=64)),
                ('inspection', models.DateField(blank=True, help_text='Last periodic inspection', null=True)),
                ('cylinder_set', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='cylinders', to='cylinders.divingcylinderset')),
            ],
            options={
                'db_table': 'diving_cylinders',
            },
        ),
    ]
