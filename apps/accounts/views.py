from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from apps.common.responses import envelope

from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    VerifyEmailSerializer,
    ResendVerificationSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    verify_user_email,
    resend_verification_code,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthDataSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, help_text="Refresh token held by the client")


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={201: AuthDataSerializer},
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = register_user(**serializer.validated_data)

    return envelope(
        {'user': UserSerializer(user).data, 'tokens': _tokens_for(user)},
        message='Registration successful. Please verify your email.',
        status=status.HTTP_201_CREATED,
    )


@extend_schema(
    request=UserLoginSerializer,
    responses={200: AuthDataSerializer},
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = authenticate_user(
        email=serializer.validated_data['email'],
        password=serializer.validated_data['password'],
    )

    return envelope(
        {'user': UserSerializer(user).data, 'tokens': _tokens_for(user)},
        message='Login successful',
    )


@extend_schema(
    request=LogoutRequestSerializer,
    description="Logout. Tokens are stateless, the client discards them.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def logout(request):
    """Logout (stateless JWT)."""
    return envelope(message='Logged out successfully')


@extend_schema(
    request=UserSerializer,
    responses={200: UserSerializer},
    description="Get or update the current user's profile.",
    tags=['auth'],
)
@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile(request):
    """Get or update current user profile."""
    if request.method == 'GET':
        return envelope({'user': UserSerializer(request.user).data})

    serializer = UserSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return envelope({'user': serializer.data}, message='Profile updated successfully')


@extend_schema(
    request=VerifyEmailSerializer,
    description="Verify user's email address with the emailed code.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def verify_email(request):
    """Verify email with code."""
    serializer = VerifyEmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    verify_user_email(
        email=serializer.validated_data['email'],
        code=serializer.validated_data['verification_code'],
    )
    return envelope(message='Email verified successfully')


@extend_schema(
    request=ResendVerificationSerializer,
    description="Send a new verification code.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def resend_verification(request):
    """Resend verification code."""
    serializer = ResendVerificationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    resend_verification_code(email=serializer.validated_data['email'])
    return envelope(message='Verification code sent successfully')
