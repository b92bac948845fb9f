from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.TextField()),
                ('segment', models.TextField(default='General')),
                ('start_date', models.DateTimeField()),
                ('end_date', models.DateTimeField()),
                ('progress', models.IntegerField(default=0)),
                ('status', models.CharField(choices=[('todo', 'To do'), ('in-progress', 'In progress'), ('done', 'Done')], default='todo', max_length=20)),
                ('description', models.TextField(blank=True, null=True)),
                ('assignee', models.TextField(blank=True, null=True)),
                ('is_overdue', models.BooleanField(default=False, null=True)),
            ],
            options={
                'ordering': ['start_date', 'id'],
            },
        ),
    ]
