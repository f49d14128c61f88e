from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from core.sanitizers import sanitize_title

User = get_user_model()


class SignupSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    class Meta:
        model = User
        fields = ['name', 'email', 'password']

    def validate_name(self, value):
        value = sanitize_title(value, max_length=150)
        if len(value) < 2:
            raise serializers.ValidationError("Name must be at least 2 characters.")
        return value

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return value

    def validate(self, attrs):
        validate_password(attrs['password'], User(email=attrs['email'], name=attrs['name']))
        return attrs

    def create(self, validated_data):
        email = validated_data['email']
        # Django still authenticates by username
        username = email.split('@')[0][:140]
        if User.objects.filter(username=username).exists():
            username = f"{username}_{User.objects.count()}"

        return User.objects.create_user(
            username=username,
            email=email,
            password=validated_data['password'],
            name=validated_data['name'],
        )


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        email = attrs.get("email").strip().lower()
        password = attrs.get("password")

        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise serializers.ValidationError("Invalid credentials")

        user = authenticate(
            username=user.username,  # IMPORTANT: Django still authenticates by username
            password=password
        )

        if not user:
            raise serializers.ValidationError("Invalid credentials")

        attrs["user"] = user
        return attrs
