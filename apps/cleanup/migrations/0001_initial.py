import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='CleanupAuditEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('action', models.CharField(choices=[('warn_34_months', '34-month inactivity warning'), ('archive_36_months', '36-month archive'), ('warn_47_months', '47-month final warning'), ('anonymize_48_months', '48-month anonymization'), ('skipped_unpaid_invoice', 'Skipped (unpaid invoices)'), ('unarchive', 'Manual unarchive')], max_length=50)),
                ('reason', models.TextField(blank=True)),
                ('last_login_date', models.DateTimeField(blank=True, null=True)),
                ('executed_at', models.DateTimeField(auto_now_add=True)),
                ('performed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='performed_cleanup_actions', to=settings.AUTH_USER_MODEL)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='cleanup_audit_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_cleanup_audit',
                'ordering': ['-executed_at'],
                'verbose_name_plural': 'cleanup audit entries',
                'indexes': [
                    models.Index(fields=['user', 'action'], name='idx_user_action'),
                    models.Index(fields=['executed_at'], name='idx_executed_at'),
                ],
            },
        ),
    ]
