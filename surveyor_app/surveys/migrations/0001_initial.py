import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


QUESTION_TYPE_CHOICES = [
    ("multiple_choice_single", "Multiple Choice (Single)"),
    ("multiple_choice_multiple", "Multiple Choice (Multiple)"),
    ("text_short", "Short Text"),
    ("text_long", "Long Text"),
    ("rating_scale", "Rating Scale"),
    ("yes_no", "Yes/No"),
    ("dropdown", "Dropdown"),
    ("checkbox", "Checkbox"),
    ("date", "Date"),
    ("time", "Time"),
    ("datetime", "Date & Time"),
    ("file_upload", "File Upload"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Survey",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("published", "Published"),
                            ("closed", "Closed"),
                        ],
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="surveys",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "type",
                    models.CharField(choices=QUESTION_TYPE_CHOICES, max_length=50),
                ),
                ("options", models.JSONField(blank=True, null=True)),
                ("validation_rules", models.JSONField(blank=True, null=True)),
                ("is_required", models.BooleanField(default=False)),
                ("order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "survey",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="questions",
                        to="surveys.survey",
                    ),
                ),
            ],
            options={
                "ordering": ["order", "id"],
                "indexes": [
                    models.Index(
                        fields=["survey", "order"], name="question_survey_order_idx"
                    ),
                    models.Index(fields=["type"], name="question_type_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Answer",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("respondent_id", models.CharField(max_length=255)),
                ("text_answer", models.TextField(blank=True, null=True)),
                ("selected_options", models.JSONField(blank=True, null=True)),
                ("rating_value", models.IntegerField(blank=True, null=True)),
                ("boolean_answer", models.BooleanField(blank=True, null=True)),
                ("date_answer", models.DateField(blank=True, null=True)),
                ("time_answer", models.TimeField(blank=True, null=True)),
                ("datetime_answer", models.DateTimeField(blank=True, null=True)),
                ("file_path", models.CharField(blank=True, max_length=255, null=True)),
                ("file_name", models.CharField(blank=True, max_length=255, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "question",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="answers",
                        to="surveys.question",
                    ),
                ),
                (
                    "survey",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="answers",
                        to="surveys.survey",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(
                        fields=["survey", "respondent_id"],
                        name="answer_survey_respondent_idx",
                    ),
                    models.Index(
                        fields=["question", "respondent_id"],
                        name="answer_question_respondent_idx",
                    ),
                ],
            },
        ),
    ]
