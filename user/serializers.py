# user/serializers.py
import re

from django.core.validators import validate_email as django_validate_email
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import User


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6)
    phone = serializers.CharField(required=False, allow_blank=True)

    class Meta:
        model = User
        fields = [
            "email",
            "name",
            "password",
            "college",
            "year",
            "phone",
        ]

    # ----------------------------
    # EMAIL VALIDATION (format + uniqueness)
    # ----------------------------
    def validate_email(self, value):
        try:
            django_validate_email(value)
        except DjangoValidationError:
            raise serializers.ValidationError("Please enter a valid email")

        value = value.lower()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("User already exists with this email")
        return value

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_college(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("College name is required")
        return value

    # ----------------------------
    #  PHONE VALIDATION (10 digits)
    # ----------------------------
    def validate_phone(self, value):
        if value and not re.match(r"^\d{10}$", value):
            raise serializers.ValidationError("Please enter a valid 10-digit phone number")
        return value

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "college",
            "year",
            "phone",
            "avatar",
            "email_notifications",
            "date_joined",
        ]


class PublicUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name", "college", "year", "avatar", "date_joined"]


class ProfileSerializer(serializers.ModelSerializer):
    avatar = serializers.ImageField(required=False, allow_null=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "college",
            "year",
            "phone",
            "avatar",
            "email_notifications",
        ]
        read_only_fields = ["id", "email"]

    def validate_phone(self, value):
        if value and not re.match(r"^\d{10}$", value):
            raise serializers.ValidationError("Please enter a valid 10-digit phone number")
        return value

    def to_representation(self, instance):
        """
        Ensure avatar is an absolute URL when the serializer has 'request' in context.
        """
        data = super().to_representation(instance)
        request = self.context.get("request", None)
        pic = data.get("avatar")
        if pic and request and pic.startswith("/"):
            data["avatar"] = request.build_absolute_uri(pic)
        return data
