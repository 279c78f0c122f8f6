import logging

from django.contrib.auth import authenticate, login, logout
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from common.exceptions import UnauthorizedError
from common.responses import success_response
from users.serializers import LoginSerializer, UserSerializer

logger = logging.getLogger(__name__)


class LoginView(APIView):
    """
    Session login for the admin dashboard.
    API clients can use /api/auth/jwt/create/ instead.
    """

    permission_classes = [AllowAny]
    serializer_class = LoginSerializer

    @extend_schema(
        request=LoginSerializer,
        responses={200: UserSerializer},
        description="Authenticate with email and password and open a session",
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request=request,
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )

        if not user:
            logger.info("Failed login for %s", serializer.validated_data["email"])
            raise UnauthorizedError("Invalid credentials")

        login(request, user)
        return success_response(UserSerializer(user).data, message="Login successful")


class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: dict}, description="Close the current session")
    def post(self, request):
        logout(request)
        return success_response(None, message="Logged out")
