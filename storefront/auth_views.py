from django.conf import settings
from django.http import JsonResponse
from django.middleware.csrf import get_token
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_protect, ensure_csrf_cookie
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .permissions import FrontendOnlyPermission, is_store_admin

COOKIE_NAME = "refresh_token"
COOKIE_PATH = "/api/token/"
COOKIE_SAMESITE = "Lax"   # "None" + secure cookie when the storefront is on another site
COOKIE_MAX_AGE = 7 * 24 * 60 * 60


def _cookie_secure():
    return not settings.DEBUG


@ensure_csrf_cookie
def csrf(request):
    """
    GET /api/csrf/ -> sets csrftoken cookie and returns it as JSON
    """
    return JsonResponse({"csrfToken": get_token(request)})


@method_decorator(csrf_protect, name="post")
class CookieTokenObtainPairView(TokenObtainPairView):
    def post(self, request, *args, **kwargs):
        res = super().post(request, *args, **kwargs)
        if res.status_code == status.HTTP_200_OK and "refresh" in res.data:
            refresh = res.data.pop("refresh")
            res.set_cookie(
                COOKIE_NAME, refresh,
                max_age=COOKIE_MAX_AGE,
                httponly=True,
                secure=_cookie_secure(),
                samesite=COOKIE_SAMESITE,
                path=COOKIE_PATH,
            )
        return res


@method_decorator(csrf_protect, name="post")
class CookieTokenRefreshView(TokenRefreshView):
    """
    POST /api/token/refresh/ -> {"access": "..."} using the HttpOnly cookie.
    Requires X-CSRFToken header (double submit).
    """
    def post(self, request, *args, **kwargs):
        refresh = request.COOKIES.get(COOKIE_NAME)
        if not refresh:
            return Response({"error": "No refresh token", "redirect": "/login"},
                            status=status.HTTP_401_UNAUTHORIZED)
        serializer = self.get_serializer(data={"refresh": refresh})
        serializer.is_valid(raise_exception=True)
        return Response(serializer.validated_data, status=status.HTTP_200_OK)


@method_decorator(csrf_protect, name="post")
class LogoutView(APIView):
    authentication_classes = ()
    permission_classes = ()

    def post(self, request):
        r = Response({"detail": "Logged out"})
        r.delete_cookie(COOKIE_NAME, path=COOKIE_PATH)
        return r


class MeAPIView(APIView):
    """GET /api/me -> who is signed in; the admin panel gates its routes on is_admin."""
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        user = request.user
        if not user or not user.is_authenticated:
            return Response({"error": "Authentication required", "redirect": "/login"},
                            status=status.HTTP_401_UNAUTHORIZED)

        profile = getattr(user, "profile", None)
        return Response({
            "id": user.pk,
            "email": user.email,
            "role": profile.role if profile else "user",
            "is_admin": is_store_admin(user),
        }, status=status.HTTP_200_OK)
