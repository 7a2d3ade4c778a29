# user/models.py
from django.db import models
from django.contrib.auth.models import (
    AbstractUser,
    BaseUserManager,
    Group,
    Permission,
)


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, name, college, year, password=None, **extra_fields):
        if not email:
            raise ValueError("Users must have an email address")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, name=name, college=college, year=year, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        # provide sensible defaults if not passed
        name = extra_fields.pop("name", "Admin")
        college = extra_fields.pop("college", "CampusMart")
        year = extra_fields.pop("year", User.YEAR_GRADUATE)

        return self.create_user(
            email=email,
            password=password,
            name=name,
            college=college,
            year=year,
            **extra_fields,
        )


class User(AbstractUser):
    YEAR_GRADUATE = "Graduate"
    YEAR_CHOICES = [
        ("1st Year", "1st Year"),
        ("2nd Year", "2nd Year"),
        ("3rd Year", "3rd Year"),
        ("4th Year", "4th Year"),
        (YEAR_GRADUATE, "Graduate"),
    ]

    username = None
    name = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    college = models.CharField(max_length=150)
    year = models.CharField(max_length=20, choices=YEAR_CHOICES)
    phone = models.CharField(max_length=10, blank=True, default="")
    avatar = models.ImageField(upload_to="avatars/", blank=True, null=True)
    email_notifications = models.BooleanField(default=True)

    # Embedded documents: both arrays are only rewritten while the row is
    # locked, see user/aggregate.py.
    wishlist = models.JSONField(default=list, blank=True)
    notifications = models.JSONField(default=list, blank=True)

    # override to avoid reverse accessor clashes with auth.User
    groups = models.ManyToManyField(
        Group,
        related_name="campusmart_user_groups",
        blank=True,
        help_text="The groups this user belongs to.",
        verbose_name="groups",
    )
    user_permissions = models.ManyToManyField(
        Permission,
        related_name="campusmart_user_permissions",
        blank=True,
        help_text="Specific permissions for this user.",
        verbose_name="user permissions",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["name", "college", "year"]

    objects = UserManager()

    def __str__(self):
        return self.email
