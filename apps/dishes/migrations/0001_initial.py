# Generated manually for dishes and dish pictures

import uuid
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('merchant_groups', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Dish',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('name', models.CharField(max_length=255)),
                ('short_description', models.TextField(blank=True)),
                ('description', models.TextField(blank=True)),
                ('price', models.PositiveIntegerField()),
                ('spiciness_level', models.FloatField(default=0.0, validators=[MinValueValidator(0.0)])),
                ('is_published', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('membership', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dishes', to='merchant_groups.groupmembership')),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dishes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'dishes',
                'verbose_name_plural': 'dishes',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='DishPicture',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('image_reference', models.CharField(max_length=500)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('position', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('dish', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='pictures', to='dishes.dish')),
            ],
            options={
                'db_table': 'dish_pictures',
                'ordering': ['position'],
            },
        ),
        migrations.AddIndex(
            model_name='dish',
            index=models.Index(fields=['membership', 'created_at'], name='dishes_membership_created_idx'),
        ),
        migrations.AddIndex(
            model_name='dish',
            index=models.Index(fields=['owner'], name='dishes_owner_idx'),
        ),
        migrations.AddIndex(
            model_name='dishpicture',
            index=models.Index(fields=['dish', 'position'], name='dish_pictures_dish_pos_idx'),
        ),
    ]
