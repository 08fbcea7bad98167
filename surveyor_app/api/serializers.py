from rest_framework import serializers

from surveyor_app.surveys.models import Answer, Question, Survey


class QuestionSerializer(serializers.ModelSerializer):
    survey_id = serializers.IntegerField(read_only=True)
    # Type tags, option requirements and order bounds are checked by the
    # question services so they surface as domain errors.
    type = serializers.CharField(max_length=50)
    type_display = serializers.CharField(read_only=True)
    description = serializers.CharField(
        max_length=1000, required=False, allow_null=True, allow_blank=True
    )
    options = serializers.ListField(
        child=serializers.CharField(max_length=255), required=False, allow_null=True
    )
    validation_rules = serializers.DictField(required=False, allow_null=True)
    order = serializers.IntegerField(required=False)

    class Meta:
        model = Question
        fields = [
            "id",
            "survey_id",
            "title",
            "description",
            "type",
            "type_display",
            "options",
            "validation_rules",
            "is_required",
            "order",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]


class SurveySerializer(serializers.ModelSerializer):
    question_count = serializers.IntegerField(read_only=True)
    response_count = serializers.IntegerField(read_only=True)
    questions = QuestionSerializer(many=True, read_only=True)

    class Meta:
        model = Survey
        fields = [
            "id",
            "title",
            "description",
            "status",
            "question_count",
            "response_count",
            "questions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def get_fields(self):
        fields = super().get_fields()
        if not self.context.get("include_questions"):
            fields.pop("questions")
        return fields


class AnswerSerializer(serializers.ModelSerializer):
    question_id = serializers.IntegerField(read_only=True)
    value = serializers.SerializerMethodField()
    question = QuestionSerializer(read_only=True)

    class Meta:
        model = Answer
        fields = ["id", "question_id", "respondent_id", "value", "question", "created_at"]

    def get_value(self, obj):
        return obj.formatted_answer


class AnswerInputSerializer(serializers.Serializer):
    question_id = serializers.IntegerField()
    value = serializers.JSONField()


class ResponseSubmissionSerializer(serializers.Serializer):
    respondent_id = serializers.CharField(max_length=255)
    answers = AnswerInputSerializer(many=True, allow_empty=False)


class ReorderSerializer(serializers.Serializer):
    question_ids = serializers.ListField(
        child=serializers.IntegerField(), required=False, default=list
    )
