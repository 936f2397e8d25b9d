from django.db import migrations, models


def date_fields():
    return [
        (
            "date_created",
            models.DateTimeField(
                auto_now_add=True,
                db_index=True,
                help_text="The moment when the item was created.",
            ),
        ),
        (
            "date_modified",
            models.DateTimeField(
                auto_now=True,
                db_index=True,
                help_text="The last moment when the item was modified.",
            ),
        ),
    ]


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Article",
            fields=[
                (
                    "id",
                    models.AutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                *date_fields(),
                (
                    "slug",
                    models.SlugField(
                        help_text="URL that the article should map to",
                        unique=True,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                (
                    "content",
                    models.TextField(
                        help_text="The body of the article. 'draft' for "
                        "unpublished ones."
                    ),
                ),
                ("published_at", models.DateTimeField()),
            ],
            options={"abstract": False},
        ),
        migrations.CreateModel(
            name="Product",
            fields=[
                (
                    "id",
                    models.AutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                *date_fields(),
                ("slug", models.SlugField(unique=True)),
                ("name", models.CharField(max_length=255)),
                (
                    "published",
                    models.BooleanField(db_index=True, default=False),
                ),
                ("created_at", models.DateTimeField()),
            ],
            options={"abstract": False},
        ),
        migrations.CreateModel(
            name="Song",
            fields=[
                (
                    "id",
                    models.AutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                *date_fields(),
                ("slug", models.SlugField(unique=True)),
                ("title", models.CharField(blank=True, max_length=255)),
                ("updated_at", models.DateTimeField()),
            ],
            options={"abstract": False},
        ),
        migrations.CreateModel(
            name="CmsPage",
            fields=[
                (
                    "id",
                    models.AutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                *date_fields(),
                ("slug", models.SlugField(unique=True)),
                ("title", models.CharField(max_length=255)),
                (
                    "page_type",
                    models.CharField(
                        choices=[
                            ("article", "Article"),
                            ("landing", "Landing page"),
                            ("product", "Product page"),
                            ("page", "Plain page"),
                        ],
                        default="page",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("published", "Published"),
                        ],
                        db_index=True,
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("priority", models.FloatField(default=0.5)),
                (
                    "changefreq",
                    models.CharField(
                        blank=True,
                        help_text="The sitemap change frequency, weekly when "
                        "blank",
                        max_length=10,
                    ),
                ),
                ("updated_at", models.DateTimeField()),
            ],
            options={"abstract": False},
        ),
    ]
