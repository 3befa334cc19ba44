from django.utils import timezone
from rest_framework import serializers

from .utils import Rejection, Sex, NicFormat, decode, explain, format_birth_date


class NicDecodeRequestSerializer(serializers.Serializer):
    nic = serializers.CharField(max_length=32)

    def validate_nic(self, value):
        """Decode the NIC, rejecting anything that does not yield a birth date"""
        reference_now = self.context.get('reference_now') or timezone.localdate()
        result = decode(value, reference_now)
        if isinstance(result, Rejection):
            raise serializers.ValidationError(result.label, code=result.value)

        self.decoded = result
        return value


class DecodedNicSerializer(serializers.Serializer):
    """Read-only representation of a decoded NIC for API clients"""
    nic = serializers.SerializerMethodField()
    format = serializers.SerializerMethodField()
    format_display = serializers.SerializerMethodField()
    birth_year = serializers.IntegerField(read_only=True)
    day_of_year = serializers.IntegerField(read_only=True)
    birth_date = serializers.DateField(read_only=True)
    birth_date_display = serializers.SerializerMethodField()
    sex = serializers.SerializerMethodField()
    sex_display = serializers.SerializerMethodField()
    age = serializers.IntegerField(read_only=True)
    explanation = serializers.SerializerMethodField()

    def get_nic(self, obj):
        return self.context.get('nic', '').upper()

    def get_format(self, obj):
        return NicFormat(obj.source_format).value

    def get_format_display(self, obj):
        return NicFormat(obj.source_format).label

    def get_birth_date_display(self, obj):
        return format_birth_date(obj.birth_date)

    def get_sex(self, obj):
        return Sex(obj.sex).value

    def get_sex_display(self, obj):
        return Sex(obj.sex).label

    def get_explanation(self, obj):
        return explain(obj, self.context.get('nic', ''))
