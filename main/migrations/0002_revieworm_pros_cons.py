from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("main", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="revieworm",
            name="pros",
            field=models.TextField(blank=True, default=""),
        ),
        migrations.AddField(
            model_name="revieworm",
            name="cons",
            field=models.TextField(blank=True, default=""),
        ),
    ]
