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
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100)),
                ("description", models.TextField(max_length=1000)),
                ("price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("original_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("category", models.CharField(choices=[("Books & Textbooks", "Books & Textbooks"), ("Electronics", "Electronics"), ("Furniture", "Furniture"), ("Clothing & Accessories", "Clothing & Accessories"), ("Sports & Fitness", "Sports & Fitness"), ("Musical Instruments", "Musical Instruments"), ("Laboratory Equipment", "Laboratory Equipment"), ("Stationery & Supplies", "Stationery & Supplies"), ("Hostel Essentials", "Hostel Essentials"), ("Vehicles & Parts", "Vehicles & Parts"), ("Services", "Services"), ("Other", "Other")], max_length=40)),
                ("condition", models.CharField(choices=[("New", "New"), ("Like New", "Like New"), ("Good", "Good"), ("Fair", "Fair"), ("Poor", "Poor")], max_length=20)),
                ("images", models.JSONField(blank=True, default=list)),
                ("location", models.CharField(max_length=120)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("contact_phone", models.CharField(blank=True, default="", max_length=20)),
                ("contact_email", models.EmailField(blank=True, default="", max_length=254)),
                ("negotiable", models.BooleanField(default=False)),
                ("is_available", models.BooleanField(default=True)),
                ("views", models.PositiveIntegerField(default=0)),
                ("sold_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("seller", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="products", to=settings.AUTH_USER_MODEL)),
                ("sold_to", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="purchases", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["category", "is_available"], name="product_pro_categor_8a2b51_idx"),
                    models.Index(fields=["seller"], name="product_pro_seller__1f0c4e_idx"),
                    models.Index(fields=["-created_at"], name="product_pro_created_5d7e93_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductInterest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("contacted_at", models.DateTimeField(auto_now_add=True)),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="interests", to="product.product")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="product_interests", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ("-contacted_at",),
                "unique_together": {("product", "user")},
            },
        ),
    ]
