from django.db import models
from django.conf import settings

User = settings.AUTH_USER_MODEL


class Product(models.Model):
    CATEGORY_CHOICES = [(c, c) for c in (
        "Books & Textbooks",
        "Electronics",
        "Furniture",
        "Clothing & Accessories",
        "Sports & Fitness",
        "Musical Instruments",
        "Laboratory Equipment",
        "Stationery & Supplies",
        "Hostel Essentials",
        "Vehicles & Parts",
        "Services",
        "Other",
    )]

    CONDITION_CHOICES = [(c, c) for c in ("New", "Like New", "Good", "Fair", "Poor")]

    STATUS_AVAILABLE = "available"
    STATUS_SOLD = "sold"
    STATUS_DRAFT = "draft"

    title = models.CharField(max_length=100)
    description = models.TextField(max_length=1000)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    original_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    category = models.CharField(max_length=40, choices=CATEGORY_CHOICES)
    condition = models.CharField(max_length=20, choices=CONDITION_CHOICES)
    # [{"url": ..., "public_id": ...}] as returned by the image store
    images = models.JSONField(default=list, blank=True)
    seller = models.ForeignKey(User, on_delete=models.CASCADE, related_name="products")
    location = models.CharField(max_length=120)
    tags = models.JSONField(default=list, blank=True)
    contact_phone = models.CharField(max_length=20, blank=True, default="")
    contact_email = models.EmailField(blank=True, default="")
    negotiable = models.BooleanField(default=False)
    is_available = models.BooleanField(default=True)
    views = models.PositiveIntegerField(default=0)
    sold_at = models.DateTimeField(null=True, blank=True)
    sold_to = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="purchases"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["category", "is_available"], name="product_pro_categor_8a2b51_idx"),
            models.Index(fields=["seller"], name="product_pro_seller__1f0c4e_idx"),
            models.Index(fields=["-created_at"], name="product_pro_created_5d7e93_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def discount_percentage(self):
        if self.original_price and self.original_price > self.price:
            return round((self.original_price - self.price) / self.original_price * 100)
        return 0

    @property
    def status(self):
        if self.is_available:
            return self.STATUS_AVAILABLE
        if self.sold_at:
            return self.STATUS_SOLD
        return self.STATUS_DRAFT


class ProductInterest(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="interests")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="product_interests")
    contacted_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("product", "user")  # one expression of interest per user
        ordering = ("-contacted_at",)

    def __str__(self):
        return f"{self.user} → {self.product}"
