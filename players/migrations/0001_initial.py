from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Player',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='Name')),
                ('email', models.CharField(blank=True, max_length=200, null=True, unique=True, verbose_name='Email')),
                ('default_handicap', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, verbose_name='Default handicap')),
                ('created_date', models.DateTimeField(auto_now_add=True, verbose_name='Created date')),
            ],
            options={
                'ordering': ('name',),
            },
        ),
    ]
