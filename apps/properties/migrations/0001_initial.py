import apps.properties.models
import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100)),
                ("description", models.TextField(validators=[django.core.validators.MinLengthValidator(20)])),
                ("location", models.CharField(max_length=255)),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                ("bedrooms", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("bathrooms", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                (
                    "guests",
                    models.PositiveSmallIntegerField(
                        help_text="Maximum number of guests.",
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("image_url", models.CharField(default=apps.properties.models.default_image_url, max_length=500)),
                (
                    "image_handle",
                    models.CharField(blank=True, help_text="Media store handle of an uploaded image.", max_length=255),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="properties",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "property",
                "verbose_name_plural": "properties",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["owner"], name="property_owner_idx"),
                    models.Index(fields=["price_per_night"], name="property_price_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("price_per_night__gt", 0)),
                        name="property_positive_price",
                    ),
                ],
            },
        ),
    ]
