from rest_framework import serializers

from campusmart.conf import app_setting
from user.models import User
from .images import upload_images
from .models import Product, ProductInterest


class SellerBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ("id", "name", "college", "year")


class TagListField(serializers.Field):
    """Accepts a list or a comma separated string; stores lowercase, trimmed, unique tags."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            raw = data.split(",")
        elif isinstance(data, (list, tuple)):
            raw = data
        else:
            raise serializers.ValidationError("Tags must be a list or a comma separated string")

        tags = []
        for item in raw:
            tag = str(item).strip().lower()
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    def to_representation(self, value):
        return list(value or [])


class ProductImagesField(serializers.ListField):
    """Uploaded image files on the way in, stored {url, public_id} pairs on the way out."""

    child = serializers.ImageField()

    def to_representation(self, data):
        return list(data or [])


class ProductSerializer(serializers.ModelSerializer):
    seller = SellerBriefSerializer(read_only=True)
    tags = TagListField(required=False)
    images = ProductImagesField(required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    original_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    status = serializers.CharField(read_only=True)
    discount_percentage = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = (
            "id", "title", "description", "price", "original_price", "discount_percentage",
            "category", "condition", "images", "seller", "location", "tags",
            "contact_phone", "contact_email", "negotiable", "is_available", "status",
            "views", "sold_at", "sold_to", "created_at", "updated_at",
        )
        read_only_fields = ("views", "sold_at", "sold_to", "created_at", "updated_at")

    # ---------------- VALIDATION ----------------

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Product title is required")
        return value

    def validate_description(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Product description is required")
        return value

    def validate_location(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Location is required")
        return value

    def validate_images(self, files):
        if len(files) > app_setting("MAX_PRODUCT_IMAGES"):
            raise serializers.ValidationError(
                f"Too many files. Maximum {app_setting('MAX_PRODUCT_IMAGES')} files allowed."
            )
        limit = app_setting("MAX_IMAGE_SIZE")
        for f in files:
            if f.size > limit:
                raise serializers.ValidationError(
                    f"File size too large. Maximum {limit // (1024 * 1024)}MB allowed."
                )
        return files

    def create(self, validated_data):
        files = validated_data.pop("images", [])
        validated_data["images"] = upload_images(files, self.context["image_store"])
        return super().create(validated_data)

    def update(self, instance, validated_data):
        files = validated_data.pop("images", None)
        if files:
            instance.images = list(instance.images) + upload_images(files, self.context["image_store"])
        return super().update(instance, validated_data)


class InterestedUserSerializer(serializers.ModelSerializer):
    user = serializers.SerializerMethodField()

    class Meta:
        model = ProductInterest
        fields = ("user", "contacted_at")

    def get_user(self, obj):
        return {"id": obj.user_id, "name": obj.user.name, "email": obj.user.email}


class OwnerProductSerializer(ProductSerializer):
    interested_users = InterestedUserSerializer(source="interests", many=True, read_only=True)

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ("interested_users",)


class MarkSoldSerializer(serializers.Serializer):
    buyer_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True
    )
