# Generated manually: payments link to installments once both tables exist

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('sales', '0001_initial'),
        ('installments', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='payment',
            name='scheduled_installment',
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='linked_payments', to='installments.scheduledinstallment'),
        ),
    ]
