ACCESS_COOKIE = "access_token"


class JWTAuthCookieMiddleware:
    """
    Browsers keep the access token in an httponly cookie (see user/views.py);
    DRF's JWTAuthentication only reads the Authorization header, so copy the
    cookie there unless the client already sent a header of its own.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        token = request.COOKIES.get(ACCESS_COOKIE)
        if token and "HTTP_AUTHORIZATION" not in request.META:
            request.META["HTTP_AUTHORIZATION"] = f"Bearer {token}"
        return self.get_response(request)
