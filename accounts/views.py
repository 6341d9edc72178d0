from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from . import services
from .serializers import UserSettingsSerializer


class UserViewSet(viewsets.ViewSet):
    """
    ViewSet for user-related operations.
    """

    permission_classes = [permissions.AllowAny]

    @action(detail=False, methods=["get"])
    def me(self, request):
        """
        Returns the username of the logged-in user.
        """
        if request.user.is_authenticated:
            return Response(
                {"username": request.user.username}, status=status.HTTP_200_OK
            )
        else:
            return Response(
                {"error": "User not authenticated"}, status=status.HTTP_401_UNAUTHORIZED
            )

    @action(
        detail=False,
        methods=["get", "put"],
        url_path="settings",
        url_name="settings",
        permission_classes=[permissions.IsAuthenticated],
    )
    def user_settings(self, request):
        """
        Notification and privacy preferences, created with defaults on first read.
        """
        if request.method == "GET":
            preferences = services.get_user_settings(request.user)
        else:
            serializer = UserSettingsSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            preferences = services.update_user_settings(request.user, **serializer.validated_data)
        return Response(UserSettingsSerializer(preferences).data)
