import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Country',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('code', models.CharField(help_text="ISO code e.g. 'TH'", max_length=3, unique=True)),
                ('priority', models.IntegerField(default=0, help_text='Higher shows first in search results')),
                ('description', models.TextField(blank=True)),
                ('flag_url', models.URLField(blank=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'visas_country',
                'ordering': ['-priority', 'name'],
                'verbose_name_plural': 'countries',
            },
        ),
        migrations.CreateModel(
            name='VisaType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('description', models.TextField(blank=True)),
                ('visa_category', models.CharField(help_text='e.g. Tourist, Business', max_length=100)),
                ('validity', models.CharField(blank=True, help_text='e.g. 3 Months', max_length=50)),
                ('max_stay', models.CharField(blank=True, help_text='e.g. 30 Days', max_length=50)),
                ('visa_fee', models.DecimalField(decimal_places=2, max_digits=10)),
                ('visa_processing_days', models.PositiveIntegerField(default=0, help_text='Earliest travel date = today + this many days')),
                ('country_overview', models.TextField(blank=True)),
                ('requirements', models.JSONField(blank=True, default=dict)),
                ('faqs', models.JSONField(blank=True, default=list)),
                ('status_badge', models.CharField(blank=True, max_length=50, null=True)),
                ('cover_image', models.ImageField(blank=True, null=True, upload_to='visa_types/')),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='visa_types', to='visas.country')),
            ],
            options={
                'db_table': 'visas_visa_type',
            },
        ),
        migrations.CreateModel(
            name='VisaRequirement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('field_name', models.CharField(help_text="Unique key for code e.g. 'mother_name'", max_length=50)),
                ('field_type', models.CharField(choices=[('text', 'Text Input'), ('email', 'Email Input'), ('phone', 'Phone Input'), ('date', 'Date Picker'), ('file', 'File Upload'), ('textarea', 'Long Text'), ('dropdown', 'Dropdown Select')], default='text', max_length=20)),
                ('field_label', models.CharField(help_text="Question text e.g. 'Mother's Name'", max_length=255)),
                ('is_required', models.BooleanField(default=True)),
                ('options', models.TextField(blank=True, help_text='JSON list of options for dropdowns', null=True)),
                ('placeholder', models.CharField(blank=True, max_length=255, null=True)),
                ('order_index', models.IntegerField(default=0, help_text='Order to display in the form')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='requirements', to='visas.country')),
            ],
            options={
                'db_table': 'visas_requirement',
                'ordering': ['order_index'],
                'constraints': [models.UniqueConstraint(fields=('country', 'field_name'), name='unique_field_per_country')],
            },
        ),
        migrations.CreateModel(
            name='VisaApplication',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('under_review', 'Under Review'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('application_data', models.JSONField(blank=True, default=dict)),
                ('submitted_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='applications', to='visas.country')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='visa_applications', to=settings.AUTH_USER_MODEL)),
                ('visa_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='applications', to='visas.visatype')),
            ],
            options={
                'db_table': 'visas_application',
                'ordering': ['-submitted_at'],
            },
        ),
        migrations.CreateModel(
            name='VisaApplicationFile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('field_name', models.CharField(max_length=100)),
                ('file_path', models.CharField(max_length=500)),
                ('file_name', models.CharField(max_length=255)),
                ('file_size', models.PositiveBigIntegerField(blank=True, null=True)),
                ('file_type', models.CharField(blank=True, max_length=100)),
                ('uploaded_at', models.DateTimeField(auto_now_add=True)),
                ('application', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='visas.visaapplication')),
            ],
            options={
                'db_table': 'visas_application_file',
                'ordering': ['id'],
            },
        ),
    ]
