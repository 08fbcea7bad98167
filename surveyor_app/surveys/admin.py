from django.contrib import admin

from .models import Answer, Question, Survey


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 0
    fields = ("order", "title", "type", "is_required")
    ordering = ("order", "id")


@admin.register(Survey)
class SurveyAdmin(admin.ModelAdmin):
    list_display = ("title", "owner", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("title", "description")
    inlines = [QuestionInline]


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("title", "survey", "type", "order", "is_required")
    list_filter = ("type", "is_required")
    search_fields = ("title",)


@admin.register(Answer)
class AnswerAdmin(admin.ModelAdmin):
    list_display = ("respondent_id", "survey", "question", "created_at")
    list_filter = ("survey",)
    search_fields = ("respondent_id",)
    readonly_fields = ("formatted_answer",)
