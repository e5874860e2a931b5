import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('players', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Tournament',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=120, verbose_name='Tournament name')),
                ('date', models.DateField(verbose_name='Date')),
                ('category', models.CharField(choices=[('major', 'Major'), ('tour', 'Tour'), ('league', 'League'), ('supr', 'Supr')], max_length=10, verbose_name='Category')),
                ('points_mode', models.CharField(choices=[('calculated', 'Calculated'), ('manual', 'Manually assigned')], default='calculated', max_length=10, verbose_name='Points mode')),
                ('status', models.CharField(choices=[('scheduled', 'Scheduled'), ('completed', 'Completed')], default='completed', max_length=10, verbose_name='Status')),
                ('created_date', models.DateTimeField(auto_now_add=True, verbose_name='Created date')),
            ],
            options={
                'ordering': ('-date', 'name'),
            },
        ),
        migrations.CreateModel(
            name='PlayerResult',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.IntegerField(verbose_name='Net position')),
                ('points', models.DecimalField(decimal_places=2, default=0, max_digits=7, verbose_name='Net points')),
                ('gross_position', models.IntegerField(blank=True, null=True, verbose_name='Gross position')),
                ('gross_points', models.DecimalField(decimal_places=2, default=0, max_digits=7, verbose_name='Gross points')),
                ('gross_score', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True, verbose_name='Gross score')),
                ('net_score', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True, verbose_name='Net score')),
                ('handicap', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, verbose_name='Course handicap')),
                ('created_date', models.DateTimeField(auto_now_add=True, verbose_name='Created date')),
                ('player', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='results', to='players.player', verbose_name='Player')),
                ('tournament', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='results', to='tournaments.tournament', verbose_name='Tournament')),
            ],
            options={
                'ordering': ('tournament', 'position'),
            },
        ),
        migrations.AddConstraint(
            model_name='playerresult',
            constraint=models.UniqueConstraint(fields=('tournament', 'player'), name='unique_tournament_player'),
        ),
        migrations.CreateModel(
            name='RecalculationLog',
            fields=[
                ('id', models.AutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=30, verbose_name='Action')),
                ('mode', models.CharField(choices=[('net', 'Net'), ('gross', 'Gross'), ('both', 'Net and Gross')], max_length=5, verbose_name='Mode')),
                ('action_date', models.DateTimeField(auto_now_add=True, verbose_name='Date')),
                ('details', models.TextField(blank=True, null=True, verbose_name='Serialized Details')),
                ('player', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to='players.player', verbose_name='Player')),
                ('tournament', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recalculation_logs', to='tournaments.tournament', verbose_name='Tournament')),
            ],
            options={
                'ordering': ('-action_date', '-id'),
            },
        ),
    ]
