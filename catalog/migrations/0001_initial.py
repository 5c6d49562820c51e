import django.db.models.deletion
from django.db import migrations, models


def taxonomy_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('name', models.CharField(db_index=True, max_length=255)),
        ('slug', models.SlugField(max_length=255)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=taxonomy_fields(),
            options={'ordering': ['name'], 'abstract': False, 'verbose_name_plural': 'categories'},
        ),
        migrations.CreateModel(
            name='Developer',
            fields=taxonomy_fields(),
            options={'ordering': ['name'], 'abstract': False},
        ),
        migrations.CreateModel(
            name='Platform',
            fields=taxonomy_fields(),
            options={'ordering': ['name'], 'abstract': False},
        ),
        migrations.CreateModel(
            name='Publisher',
            fields=taxonomy_fields(),
            options={'ordering': ['name'], 'abstract': False},
        ),
        migrations.CreateModel(
            name='Game',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=255)),
                ('slug', models.SlugField(max_length=255)),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ('release_date', models.DateTimeField(blank=True, null=True)),
                ('rating', models.CharField(choices=[('FREE', 'Free'), ('BR0', 'All ages'), ('BR10', '10+'), ('BR12', '12+'), ('BR14', '14+'), ('BR16', '16+'), ('BR18', '18+')], default='BR0', max_length=8)),
                ('short_description', models.CharField(blank=True, max_length=160)),
                ('description', models.TextField(blank=True)),
                ('cover', models.ImageField(blank=True, upload_to='covers/')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('categories', models.ManyToManyField(blank=True, related_name='games', to='catalog.category')),
                ('developers', models.ManyToManyField(blank=True, related_name='games', to='catalog.developer')),
                ('platforms', models.ManyToManyField(blank=True, related_name='games', to='catalog.platform')),
                ('publisher', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='games', to='catalog.publisher')),
            ],
        ),
        migrations.CreateModel(
            name='GalleryImage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('image', models.ImageField(upload_to='gallery/')),
                ('position', models.PositiveIntegerField(default=0)),
                ('game', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='gallery', to='catalog.game')),
            ],
            options={'ordering': ['position', 'id']},
        ),
        migrations.CreateModel(
            name='UploadFailure',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('image', models.CharField(max_length=500)),
                ('field', models.CharField(max_length=32)),
                ('error', models.TextField(blank=True)),
                ('replayed', models.BooleanField(db_index=True, default=False)),
                ('resolved', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('replayed_at', models.DateTimeField(blank=True, null=True)),
                ('game', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='upload_failures', to='catalog.game')),
            ],
            options={'ordering': ['created_at', 'id']},
        ),
    ]
