from django.db import models
from django.contrib.auth.models import AbstractUser


class CustomUser(AbstractUser):
    # 1. Login Field
    email = models.EmailField(unique=True)

    # 2. Profile Info (first_name / last_name come from AbstractUser)
    phone = models.CharField(max_length=20, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    # 3. Configuration
    USERNAME_FIELD = 'email'

    # 'email' and 'password' are auto-required by Django.
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users_customuser'

    def __str__(self):
        return self.email

    def save(self, *args, **kwargs):
        # Username mirrors the email so the stock UserManager keeps working.
        if not self.username:
            self.username = self.email
        super().save(*args, **kwargs)
