# Generated manually for the installments app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('installments', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.AddField(
            model_name='scheduledinstallment',
            name='last_notification_type',
            field=models.CharField(blank=True, choices=[('reminder', 'Reminder'), ('due_today', 'Due Today'), ('overdue', 'Overdue')], max_length=20),
        ),
        migrations.RemoveIndex(
            model_name='paymentnotification',
            name='notifications_read_idx',
        ),
        migrations.RemoveField(
            model_name='paymentnotification',
            name='is_read',
        ),
        migrations.AddIndex(
            model_name='paymentnotification',
            index=models.Index(fields=['created_at'], name='notifications_created_idx'),
        ),
        migrations.CreateModel(
            name='NotificationRead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('read_at', models.DateTimeField(auto_now_add=True)),
                ('notification', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reads', to='installments.paymentnotification')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notification_reads', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'payment_notification_reads',
                'constraints': [
                    models.UniqueConstraint(fields=('notification', 'user'), name='unique_notification_read_per_user'),
                ],
            },
        ),
    ]
