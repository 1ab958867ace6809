from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import payroll.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('users', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='TeacherPayrollProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('hourly_rate', models.DecimalField(decimal_places=2, help_text='Pay per billable hour', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('hourly_currency', models.CharField(default=payroll.models._default_currency, max_length=3)),
                ('base_salary_amount', models.DecimalField(blank=True, decimal_places=2, help_text='Fixed amount paid per settlement period', max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('base_salary_currency', models.CharField(default=payroll.models._default_currency, max_length=3)),
                ('contract_type', models.CharField(choices=[('employee', 'Employee'), ('freelancer', 'Freelancer'), ('none', 'None')], default='employee', max_length=20)),
                ('insurance_enrolled', models.BooleanField(default=False, help_text='Social insurance enrollment, employees only')),
                ('effective_from', models.DateField()),
                ('effective_to', models.DateField(blank=True, help_text='Last day the terms apply; empty = open ended', null=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_payroll_profiles', to='users.employee')),
                ('teacher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payroll_profiles', to='users.employee')),
            ],
            options={
                'verbose_name': 'Teacher Payroll Profile',
                'verbose_name_plural': 'Teacher Payroll Profiles',
                'ordering': ['teacher', '-effective_from'],
                'indexes': [models.Index(fields=['teacher', 'effective_from'], name='pay_profile_teacher_from_idx')],
            },
        ),
        migrations.CreateModel(
            name='TeacherPayrollRun',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period_start', models.DateField()),
                ('period_end', models.DateField()),
                ('contract_type', models.CharField(choices=[('employee', 'Employee'), ('freelancer', 'Freelancer'), ('none', 'None')], max_length=20)),
                ('insurance_enrolled', models.BooleanField(default=False)),
                ('total_work_hours', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=8)),
                ('hourly_total', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('weekly_allowance', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('base_salary_total', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('adjustment_total', models.DecimalField(decimal_places=2, default=Decimal('0'), help_text='Sum of manual additions and incentives', max_digits=12)),
                ('gross_pay', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('deductions_total', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('net_pay', models.DecimalField(decimal_places=2, default=Decimal('0'), help_text='May be negative; surfaced as-is', max_digits=12)),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('pending_ack', 'Awaiting confirmation'), ('confirmed', 'Confirmed')], default='draft', max_length=20)),
                ('message_preview', models.TextField(blank=True)),
                ('meta', models.JSONField(blank=True, default=dict)),
                ('requested_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_payroll_runs', to='users.employee')),
                ('payroll_profile', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='runs', to='payroll.teacherpayrollprofile')),
                ('requested_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='requested_payroll_runs', to='users.employee')),
                ('teacher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payroll_runs', to='users.employee')),
            ],
            options={
                'verbose_name': 'Teacher Payroll Run',
                'verbose_name_plural': 'Teacher Payroll Runs',
                'ordering': ['-period_start', 'teacher'],
                'unique_together': {('teacher', 'period_start', 'period_end')},
                'indexes': [
                    models.Index(fields=['period_start', 'period_end'], name='pay_run_period_idx'),
                    models.Index(fields=['status'], name='pay_run_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TeacherPayrollRunItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('item_kind', models.CharField(choices=[('earning', 'Earning'), ('deduction', 'Deduction'), ('info', 'Info')], max_length=20)),
                ('label', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('order_index', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('run', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='payroll.teacherpayrollrun')),
            ],
            options={
                'verbose_name': 'Teacher Payroll Run Item',
                'verbose_name_plural': 'Teacher Payroll Run Items',
                'ordering': ['run', 'order_index'],
            },
        ),
        migrations.CreateModel(
            name='TeacherPayrollAcknowledgement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed')], default='pending', max_length=20)),
                ('requested_at', models.DateTimeField(blank=True, null=True)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('note', models.TextField(blank=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('requested_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='requested_acknowledgements', to='users.employee')),
                ('run', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='acknowledgement', to='payroll.teacherpayrollrun')),
            ],
            options={
                'verbose_name': 'Teacher Payroll Acknowledgement',
                'verbose_name_plural': 'Teacher Payroll Acknowledgements',
            },
        ),
    ]
