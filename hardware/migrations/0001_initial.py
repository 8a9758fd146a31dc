from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Component",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("cpu", "CPU"),
                            ("gpu", "GPU"),
                            ("motherboard", "Motherboard"),
                            ("ram", "RAM"),
                            ("storage", "Storage"),
                            ("psu", "Power Supply"),
                            ("case", "Case"),
                            ("cooler", "CPU Cooler"),
                            ("monitor", "Monitor"),
                            ("keyboard", "Keyboard"),
                            ("mouse", "Mouse"),
                            ("headset", "Headset"),
                        ],
                        max_length=20,
                    ),
                ),
                ("brand", models.CharField(blank=True, default="", max_length=100)),
                ("model", models.CharField(blank=True, default="", max_length=100)),
                ("name", models.CharField(blank=True, default="", max_length=200)),
                ("slug", models.SlugField(blank=True, max_length=200, null=True, unique=True)),
                ("specs", models.JSONField(blank=True, default=dict)),
                ("wattage", models.IntegerField(blank=True, null=True)),
                ("popularity", models.IntegerField(default=0)),
                ("release_date", models.DateField(blank=True, null=True)),
                ("purposes", models.JSONField(blank=True, default=list)),
            ],
            options={
                "ordering": ("-popularity", "-release_date", "id"),
            },
        ),
        migrations.CreateModel(
            name="Price",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("store", models.CharField(max_length=100)),
                ("url", models.URLField(blank=True, default="")),
                (
                    "component",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="prices",
                        to="hardware.component",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="Benchmark",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("score", models.DecimalField(decimal_places=2, max_digits=6)),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("single_thread", "Single thread"),
                            ("multi_thread", "Multi thread"),
                            ("gaming", "Gaming"),
                            ("compute", "Compute"),
                        ],
                        max_length=30,
                    ),
                ),
                (
                    "component",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="benchmarks",
                        to="hardware.component",
                    ),
                ),
            ],
            options={
                "unique_together": {("component", "category")},
            },
        ),
    ]
