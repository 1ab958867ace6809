import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('users', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='WorkLogEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('work_date', models.DateField(help_text="Calendar date in the school's time zone")),
                ('status', models.CharField(choices=[('worked', 'Worked'), ('tardy', 'Tardy'), ('absence', 'Absence'), ('substitute', 'Substitute')], max_length=20)),
                ('work_hours', models.DecimalField(blank=True, decimal_places=2, help_text='Billable hours, only for worked and tardy days', max_digits=5, null=True)),
                ('substitute_type', models.CharField(blank=True, choices=[('internal', 'Internal teacher'), ('external', 'External teacher')], max_length=20)),
                ('external_teacher_name', models.CharField(blank=True, max_length=100)),
                ('external_teacher_phone', models.CharField(blank=True, max_length=30)),
                ('external_teacher_bank', models.CharField(blank=True, max_length=50)),
                ('external_teacher_account', models.CharField(blank=True, max_length=50)),
                ('external_teacher_hours', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('external_teacher_pay_status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed')], default='pending', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('review_status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('review_note', models.TextField(blank=True)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reviewed_work_log_entries', to='users.employee')),
                ('substitute_teacher', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='substitute_entries', to='users.employee')),
                ('teacher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='work_log_entries', to='users.employee')),
            ],
            options={
                'verbose_name': 'Work Log Entry',
                'verbose_name_plural': 'Work Log Entries',
                'ordering': ['-work_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['teacher', 'work_date'], name='wt_entry_teacher_date_idx'),
                    models.Index(fields=['review_status', 'work_date'], name='wt_entry_review_idx'),
                ],
            },
        ),
    ]
