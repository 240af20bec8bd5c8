# Generated manually for orders

import uuid
from django.conf import settings
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
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('request_token', models.UUIDField(editable=False, unique=True)),
                ('special_instructions', models.TextField(blank=True)),
                ('order_date', models.DateTimeField(auto_now_add=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('rejected', 'Rejected'), ('in_progress', 'In progress'), ('shipped', 'Shipped'), ('ready_for_pickup', 'Ready for pickup'), ('delivered', 'Delivered'), ('picked_up', 'Picked up'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('order_total', models.PositiveIntegerField()),
                ('fulfillment_schedule_type', models.CharField(choices=[('asap', 'As soon as possible'), ('scheduled', 'Scheduled')], default='asap', max_length=20)),
                ('fulfillment_date', models.DateTimeField(blank=True, null=True)),
                ('fulfillment_method', models.CharField(choices=[('delivery', 'Delivery'), ('pickup', 'Pickup'), ('dine_in', 'Dine in')], max_length=20)),
                ('fulfillment_details', models.JSONField(blank=True, default=dict)),
                ('items', models.JSONField(default=list)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('buyer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders_placed', to=settings.AUTH_USER_MODEL)),
                ('buyer_membership', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders_as_buyer', to='merchant_groups.groupmembership')),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='merchant_groups.merchantgroup')),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders_received', to=settings.AUTH_USER_MODEL)),
                ('seller_membership', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders_as_seller', to='merchant_groups.groupmembership')),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-order_date'],
            },
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['buyer', 'order_date'], name='orders_buyer_date_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['seller', 'order_date'], name='orders_seller_date_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['group', 'status'], name='orders_group_status_idx'),
        ),
    ]
