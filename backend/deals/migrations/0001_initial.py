from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OfferDocument",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("coupon_code", models.CharField(blank=True, db_index=True, default="", max_length=64)),
                ("source_portal", models.CharField(blank=True, db_index=True, default="", max_length=32)),
                ("is_expired", models.BooleanField(db_index=True, default=False)),
                ("document", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
