# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils.text import slugify


class User(AbstractUser):
    ONBOARDING_NOT_STARTED = "NOT_STARTED"
    ONBOARDING_IN_PROGRESS = "IN_PROGRESS"
    ONBOARDING_COMPLETED = "COMPLETED"

    ONBOARDING_CHOICES = [
        (ONBOARDING_NOT_STARTED, "Not started"),
        (ONBOARDING_IN_PROGRESS, "In progress"),
        (ONBOARDING_COMPLETED, "Completed"),
    ]

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    slug = models.SlugField(max_length=180, unique=True, blank=True)

    # Reward counter, only ever incremented (see gamification.engine)
    trust_points = models.PositiveIntegerField(default=0)
    onboarding_status = models.CharField(
        max_length=20,
        choices=ONBOARDING_CHOICES,
        default=ONBOARDING_NOT_STARTED,
    )
    email_verified = models.BooleanField(default=False)

    # Step 1: basics
    headline = models.CharField(max_length=255, blank=True)
    about = models.TextField(blank=True)
    location_city = models.CharField(max_length=100, blank=True)
    location_country = models.CharField(max_length=100, blank=True)

    # Step 2: social
    organization = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    image = models.URLField(max_length=1024, blank=True, null=True)
    linkedin_url = models.URLField(blank=True, null=True)
    github_url = models.URLField(blank=True, null=True)
    portfolio_url = models.URLField(blank=True, null=True)
    x_url = models.URLField(blank=True, null=True)

    # Step 4: skills
    skills = models.JSONField(default=list, blank=True, help_text="List of technical skills")

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        return self.name or self.username

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    def _unique_slug(self):
        base = slugify(self.name or self.username or self.email.split("@")[0]) or "user"
        candidate = base
        suffix = 1
        while User.objects.filter(slug=candidate).exclude(pk=self.pk).exists():
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate


class Education(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="education")
    institution = models.CharField(max_length=255)
    degree = models.CharField(max_length=100, blank=True, null=True, help_text="e.g. B.Tech CSE, MBA")
    field_of_study = models.CharField(max_length=100, blank=True, null=True)
    start_year = models.PositiveIntegerField(blank=True, null=True)
    end_year = models.PositiveIntegerField(blank=True, null=True)
    grade = models.CharField(max_length=50, blank=True, null=True)
    description = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ["-start_year"]

    def __str__(self):
        return f"{self.user} @ {self.institution}"


class Achievement(models.Model):
    CATEGORY_HACKATHON = "HACKATHON"
    CATEGORY_CERTIFICATION = "CERTIFICATION"
    CATEGORY_AWARD = "AWARD"
    CATEGORY_OPEN_SOURCE = "OPEN_SOURCE"
    CATEGORY_ACADEMIC = "ACADEMIC"
    CATEGORY_OTHER = "OTHER"

    CATEGORY_CHOICES = [
        (CATEGORY_HACKATHON, "Hackathon"),
        (CATEGORY_CERTIFICATION, "Certification"),
        (CATEGORY_AWARD, "Award"),
        (CATEGORY_OPEN_SOURCE, "Open Source"),
        (CATEGORY_ACADEMIC, "Academic"),
        (CATEGORY_OTHER, "Other"),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="achievements")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    issuer = models.CharField(max_length=255, blank=True, null=True)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default=CATEGORY_OTHER)
    proof_url = models.URLField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.title} ({self.user})"


class Follow(models.Model):
    follower = models.ForeignKey(User, on_delete=models.CASCADE, related_name="following_links")
    following = models.ForeignKey(User, on_delete=models.CASCADE, related_name="follower_links")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["follower", "following"], name="unique_follow_pair"),
        ]

    def __str__(self):
        return f"{self.follower} -> {self.following}"
