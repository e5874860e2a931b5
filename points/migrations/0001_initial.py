from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='PointsTableEntry',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('category', models.CharField(choices=[('major', 'Major'), ('tour', 'Tour'), ('league', 'League'), ('supr', 'Supr')], max_length=10, verbose_name='Tournament category')),
                ('position', models.PositiveIntegerField(verbose_name='Position')),
                ('points', models.DecimalField(decimal_places=3, max_digits=7, verbose_name='Points')),
            ],
            options={
                'verbose_name': 'Points Table Entry',
                'verbose_name_plural': 'Points Table',
                'ordering': ('category', 'position'),
            },
        ),
        migrations.AddConstraint(
            model_name='pointstableentry',
            constraint=models.UniqueConstraint(fields=('category', 'position'), name='unique_category_position'),
        ),
    ]
